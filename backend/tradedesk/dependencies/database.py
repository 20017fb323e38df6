"""
Database dependencies shared by the routers.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase

from tradedesk.database.connections import get_mongo_client
from tradedesk.database.databases import auth_db, trading_db


async def get_auth_db() -> AsyncIOMotorDatabase:
    """Dependency returning the auth database."""
    client = await get_mongo_client()
    return client[auth_db.DB_NAME]


async def get_trading_db() -> AsyncIOMotorDatabase:
    """Dependency returning the trading database."""
    client = await get_mongo_client()
    return client[trading_db.DB_NAME]
