"""
Authentication dependencies for route protection.
"""
from typing import Annotated, Optional

from fastapi import Cookie, Depends, Header, HTTPException, status
from jose import JWTError
from motor.motor_asyncio import AsyncIOMotorDatabase

from tradedesk.core.security import TOKEN_COOKIE_NAME, decode_token
from tradedesk.dependencies.database import get_auth_db
from tradedesk.models.user import User
from tradedesk.services.auth_service import AuthService


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip()
    return None


async def get_current_user(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_auth_db)],
    token: Annotated[Optional[str], Cookie(alias=TOKEN_COOKIE_NAME)] = None,
    authorization: Annotated[Optional[str], Header()] = None,
) -> User:
    """
    Dependency to get the current authenticated user from the session token.

    The token is read from the ``token`` cookie, or from an
    ``Authorization: Bearer`` header when no cookie is sent.

    Raises:
        HTTPException 401: If token is missing, invalid or expired
        HTTPException 401: If user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    raw_token = token or _bearer_token(authorization)
    if not raw_token:
        raise credentials_exception

    try:
        payload = decode_token(raw_token)
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    if user_id is None:
        raise credentials_exception

    user = await AuthService(db).get_user_by_id(user_id)
    if user is None:
        raise credentials_exception

    return user


# Type alias for cleaner route signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
