"""
Service layer for business logic.
"""
from tradedesk.services.auth_service import AuthService
from tradedesk.services.ledger_service import LedgerService
from tradedesk.services.order_service import OrderService
from tradedesk.services.approval_sweeper import ApprovalSweeper

__all__ = [
    "AuthService",
    "LedgerService",
    "OrderService",
    "ApprovalSweeper",
]
