"""
Index creation run on application startup.
"""
from motor.motor_asyncio import AsyncIOMotorClient

from tradedesk.database.databases import auth_db, trading_db


async def create_indexes(client: AsyncIOMotorClient) -> None:
    """Create necessary indexes for all databases."""

    # Auth DB indexes
    auth_users = client[auth_db.DB_NAME][auth_db.Collections.USERS]
    await auth_users.create_index("email", unique=True)
    await auth_users.create_index("username", unique=True)

    # Trading DB indexes
    trading = client[trading_db.DB_NAME]
    await trading[trading_db.Collections.HOLDINGS].create_index("name", unique=True)
    await trading[trading_db.Collections.ORDERS].create_index("name")
    await trading[trading_db.Collections.ORDERS].create_index("approved")
