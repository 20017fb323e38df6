"""
Service-layer exceptions.

Services raise these; routers translate them into HTTP responses.
"""
from typing import Optional


class TradeDeskError(Exception):
    """Base class for errors raised by the service layer."""


class ValidationError(TradeDeskError):
    """Malformed or missing input. Carries every violation found."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


class ConflictError(TradeDeskError):
    """Duplicate email or username."""


class AuthenticationError(TradeDeskError):
    """Credentials or session token rejected."""


class DomainError(TradeDeskError):
    """Order rejected by the holdings ledger (oversell, sell without holding)."""


class ConcurrencyError(ConflictError):
    """Holding kept changing underneath an update until retries ran out."""
