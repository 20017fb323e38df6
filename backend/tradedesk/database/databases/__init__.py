"""
Database definitions and collection constants.
"""
from tradedesk.database.databases import auth_db, trading_db

__all__ = ["auth_db", "trading_db"]
