"""
Security utilities for password hashing and JWT token management.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt
from passlib.context import CryptContext

from tradedesk.config import get_settings

# Session cookie carrying the JWT
TOKEN_COOKIE_NAME = "token"

# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        plain_password: The plain text password to hash

    Returns:
        Hashed password string
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def token_lifetime_seconds() -> int:
    """Lifetime of issued tokens, also used as the cookie max-age."""
    return get_settings().jwt_access_token_expire_minutes * 60


def create_access_token(
    user_id: str,
    email: str,
    username: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed JWT session token.

    Args:
        user_id: Unique user identifier (becomes the ``sub`` claim)
        email: User email, copied into the claims
        username: Username, copied into the claims
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(seconds=token_lifetime_seconds())

    now = datetime.now(timezone.utc)

    payload = {
        "sub": user_id,
        "email": email,
        "username": username,
        "iss": settings.app_name,
        "exp": now + expires_delta,
        "iat": now,
    }

    return jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        JWTError: If token is invalid, expired or from another issuer
    """
    settings = get_settings()

    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        issuer=settings.app_name,
    )
