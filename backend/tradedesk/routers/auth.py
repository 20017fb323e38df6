"""
Authentication router for signup, login and session management.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from tradedesk.config import get_settings
from tradedesk.core.exceptions import AuthenticationError, ConflictError, ValidationError
from tradedesk.core.security import TOKEN_COOKIE_NAME, token_lifetime_seconds
from tradedesk.dependencies.auth import CurrentUser
from tradedesk.dependencies.database import get_auth_db
from tradedesk.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserResponse,
)
from tradedesk.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


async def get_auth_service(
    db: AsyncIOMotorDatabase = Depends(get_auth_db),
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(db)


def set_session_cookie(response: Response, token: str) -> None:
    """HTTP-only, same-site strict cookie living as long as the token."""
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        max_age=token_lifetime_seconds(),
        path="/",
        httponly=True,
        secure=get_settings().is_production,
        samesite="strict",
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def signup(
    body: SignupRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user account.

    - **email**: Valid email address (must be unique)
    - **password**: Password (minimum 8 characters)
    - **username**: Username (minimum 3 characters, must be unique)

    All validation failures are returned together. The session token is
    returned in the body and set as the `token` cookie.
    """
    try:
        result = await auth_service.signup(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(e), "errors": e.errors},
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )

    set_session_cookie(response, result.token)
    return result


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and get a session token",
)
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with email and password.

    The token is returned in the body and set as the `token` cookie.
    """
    try:
        result = await auth_service.login(body)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    set_session_cookie(response, result.token)
    return result


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Clear the session cookie",
)
async def logout(response: Response):
    response.delete_cookie(
        key=TOKEN_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=get_settings().is_production,
        samesite="strict",
    )
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user info",
)
async def get_current_user_info(current_user: CurrentUser):
    """
    Get information about the currently authenticated user.

    Requires the `token` cookie or an `Authorization: Bearer` header.
    """
    return AuthService.to_user_response(current_user)
