"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing
services and routes against the in-memory databases.
"""

import pytest
import pytest_asyncio


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def auth_service(mock_auth_db):
    """AuthService bound to the mock auth database."""
    from tradedesk.services.auth_service import AuthService
    return AuthService(mock_auth_db)


@pytest_asyncio.fixture
async def order_service(mock_trading_db):
    """OrderService bound to the mock trading database."""
    from tradedesk.services.order_service import OrderService
    return OrderService(mock_trading_db)


@pytest_asyncio.fixture
async def ledger_service(mock_trading_db):
    """LedgerService bound to the mock trading database."""
    from tradedesk.services.ledger_service import LedgerService
    return LedgerService(mock_trading_db)


@pytest.fixture
def place():
    """Helper placing an order through a service and returning the response."""
    from tradedesk.schemas.order import OrderCreate

    async def _place(service, name="INFY", qty=10, price=100.0, mode="BUY"):
        return await service.place_order(
            OrderCreate(name=name, qty=qty, price=price, mode=mode)
        )
    return _place


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in str(data["detail"]).lower()
    return _assert
