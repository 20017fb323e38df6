"""
Integration test fixtures.

These tests require a running backend with MongoDB behind it.
Mark with @pytest.mark.integration to skip in normal test runs.
"""
import os
import time

import httpx
import pytest


@pytest.fixture
def live_backend_url():
    """Get base URL for live backend tests (if running)."""
    return os.getenv("BACKEND_URL", "http://localhost:3002")


@pytest.fixture
def test_timeout():
    """Timeout for network requests in integration tests."""
    return 30


@pytest.fixture
def live_client(live_backend_url, test_timeout):
    """httpx client against the live backend; skips when it is not running."""
    with httpx.Client(base_url=live_backend_url, timeout=test_timeout) as client:
        try:
            client.get("/health")
        except httpx.ConnectError:
            pytest.skip("Backend not running")
        yield client


@pytest.fixture
def unique_ticker():
    """Ticker no previous run has touched."""
    return f"IT{int(time.time() * 1000)}"
