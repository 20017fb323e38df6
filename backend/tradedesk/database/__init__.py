"""
Database module - MongoDB and Redis connections and database definitions.
"""
from tradedesk.database.connections import (
    get_mongo_client,
    get_redis_client,
    ping_mongo,
    close_connections,
)
from tradedesk.database.databases import auth_db, trading_db
from tradedesk.database.indexes import create_indexes

__all__ = [
    "get_mongo_client",
    "get_redis_client",
    "ping_mongo",
    "close_connections",
    "create_indexes",
    "auth_db",
    "trading_db",
]
