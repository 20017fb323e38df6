"""
Global test fixtures for tradedesk.

This module provides shared fixtures for all tests including:
- Test environment variables (set before the application is imported)
- Mock MongoDB (mongomock-motor)
- Mock Redis (fakeredis)
- User and order payload factories
- FastAPI test clients wired to the mocks
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("APPROVAL_SWEEP_ENABLED", "false")
os.environ.setdefault("FRONTEND_URL", "http://localhost:3000")


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    from mongomock_motor import AsyncMongoMockClient
    return AsyncMongoMockClient()


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide mock auth_db database with the application's indexes."""
    from tradedesk.database.indexes import create_indexes

    await create_indexes(mock_async_mongo_client)
    yield mock_async_mongo_client["auth_db"]


@pytest_asyncio.fixture
async def mock_trading_db(mock_async_mongo_client):
    """Provide mock trading_db database with the application's indexes."""
    from tradedesk.database.indexes import create_indexes

    await create_indexes(mock_async_mongo_client)
    yield mock_async_mongo_client["trading_db"]


# =============================================================================
# Redis Fixtures (fakeredis)
# =============================================================================

@pytest.fixture
def mock_async_redis():
    """
    Create an async mock Redis client using fakeredis.
    """
    import fakeredis
    import fakeredis.aioredis

    return fakeredis.aioredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


# =============================================================================
# Payload Fixtures
# =============================================================================

@pytest.fixture
def signup_payload() -> dict:
    """Valid signup request body."""
    return {
        "email": "trader@example.com",
        "password": "SecurePass1",
        "username": "trader",
    }


@pytest.fixture
def order_payload():
    """Factory for /newOrder request bodies."""
    def _make(name="INFY", qty=10, price=100.0, mode="BUY") -> dict:
        return {"name": name, "qty": qty, "price": price, "mode": mode}
    return _make


@pytest.fixture
def mock_holding() -> dict:
    """A holding document as stored in MongoDB."""
    now = datetime.now(timezone.utc)
    return {
        "name": "TCS",
        "qty": 15,
        "avg": 150.0,
        "price": 180.0,
        "net": 0,
        "day": 0,
        "version": 3,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def mock_position() -> dict:
    """A position snapshot document as loaded into MongoDB."""
    return {
        "product": "CNC",
        "name": "EVEREADY",
        "qty": 2,
        "avg": 316.27,
        "price": 312.35,
        "net": "+0.58%",
        "day": "-1.24%",
        "isLoss": True,
    }


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(mock_async_mongo_client, mock_async_redis):
    """
    The FastAPI app with MongoDB and Redis replaced by in-memory mocks.

    Startup still runs: indexes are created on the mock client.
    """
    from tradedesk.dependencies.database import get_auth_db, get_trading_db
    from tradedesk.main import app

    app.dependency_overrides[get_auth_db] = lambda: mock_async_mongo_client["auth_db"]
    app.dependency_overrides[get_trading_db] = lambda: mock_async_mongo_client["trading_db"]

    with patch("tradedesk.main.get_mongo_client", new=AsyncMock(return_value=mock_async_mongo_client)), \
         patch("tradedesk.main.ping_mongo", new=AsyncMock()), \
         patch("tradedesk.main.close_connections", new=AsyncMock()), \
         patch("tradedesk.core.rate_limit.get_redis_client", new=AsyncMock(return_value=mock_async_redis)):
        yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Use this for synchronous endpoint testing.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def signed_up_client(client, signup_payload) -> TestClient:
    """A client whose cookie jar holds a fresh session token."""
    response = client.post("/auth/signup", json=signup_payload)
    assert response.status_code == 201
    return client
