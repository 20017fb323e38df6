"""
Pydantic models for database documents.
"""
from tradedesk.models.user import User
from tradedesk.models.holding import Holding
from tradedesk.models.position import Position
from tradedesk.models.order import Order, OrderMode

__all__ = [
    "User",
    "Holding",
    "Position",
    "Order",
    "OrderMode",
]
