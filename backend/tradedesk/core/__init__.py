"""
Core module - Security, rate limiting, errors and middleware.
"""
from tradedesk.core.exceptions import (
    TradeDeskError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    DomainError,
    ConcurrencyError,
)
from tradedesk.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)
from tradedesk.core.rate_limit import check_rate_limit

__all__ = [
    "TradeDeskError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "DomainError",
    "ConcurrencyError",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    "check_rate_limit",
]
