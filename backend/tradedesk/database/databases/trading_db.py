"""
Trading database configuration.
Stores the holdings ledger, position snapshots and the order log.
"""

DB_NAME = "trading_db"


class Collections:
    """Collection names in trading_db."""
    HOLDINGS = "holdings"
    POSITIONS = "positions"
    ORDERS = "orders"
