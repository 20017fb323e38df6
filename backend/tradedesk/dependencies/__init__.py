"""
Dependencies for dependency injection in routes.
"""
from tradedesk.dependencies.auth import CurrentUser, get_current_user
from tradedesk.dependencies.database import get_auth_db, get_trading_db

__all__ = [
    "CurrentUser",
    "get_current_user",
    "get_auth_db",
    "get_trading_db",
]
