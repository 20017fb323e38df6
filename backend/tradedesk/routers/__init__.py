"""
API Routers module.
"""
from tradedesk.routers import auth, health, holdings, orders, positions

__all__ = ["auth", "health", "holdings", "orders", "positions"]
