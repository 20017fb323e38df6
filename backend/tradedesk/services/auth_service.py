"""
Authentication service for signup, login and user lookup.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from email_validator import EmailNotValidError, validate_email
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from tradedesk.config import get_settings
from tradedesk.core.exceptions import AuthenticationError, ConflictError, ValidationError
from tradedesk.core.security import create_access_token, hash_password, verify_password
from tradedesk.database.databases import auth_db
from tradedesk.models.user import User
from tradedesk.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserResponse

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 8
USERNAME_MIN_LENGTH = 3


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def is_valid_email(email: str) -> bool:
    """Syntax check only, no DNS lookups."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_signup(email: str, password: str, username: str) -> list[str]:
    """
    Collect every signup validation failure.

    Inputs are expected to be normalised already. An empty list means the
    request is valid.
    """
    errors = []

    if not email:
        errors.append("Email is required")
    elif not is_valid_email(email):
        errors.append("Invalid email format")

    if not password:
        errors.append("Password is required")
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    if not username:
        errors.append("Username is required")
    elif len(username) < USERNAME_MIN_LENGTH:
        errors.append(f"Username must be at least {USERNAME_MIN_LENGTH} characters")

    return errors


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with auth database."""
        self.db = db
        self.users_collection = db[auth_db.Collections.USERS]
        self.settings = get_settings()

    async def signup(self, request: SignupRequest) -> AuthResponse:
        """
        Register a new user and issue a session token.

        Raises:
            ValidationError: With every failing field listed
            ConflictError: If the email or username is taken
        """
        email = _clean(request.email).lower()
        password = _clean(request.password)
        username = _clean(request.username)

        errors = validate_signup(email, password, username)
        if errors:
            raise ValidationError("Validation failed", errors)

        existing_email, existing_username = await asyncio.gather(
            self.users_collection.find_one({"email": email}, {"_id": 1}),
            self.users_collection.find_one({"username": username}, {"_id": 1}),
        )
        if existing_email:
            raise ConflictError("Email already registered")
        if existing_username:
            raise ConflictError("Username already taken")

        user_doc = {
            "email": email,
            "username": username,
            "hashed_password": hash_password(password),
            "created_at": datetime.now(timezone.utc),
        }

        try:
            result = await self.users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent signup for the same email/username
            raise ConflictError("Email or username already registered")

        user_doc["_id"] = str(result.inserted_id)
        user = User(**user_doc)
        logger.info("Registered user %s", user.id)

        return self._auth_response(user, "User created successfully")

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Authenticate user and return a session token.

        Raises:
            AuthenticationError: If credentials are invalid
        """
        email = _clean(request.email).lower()
        password = _clean(request.password)

        if not email or not password:
            raise AuthenticationError("Email and password are required")

        user = await self.get_user_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Incorrect email or password")

        return self._auth_response(user, "Logged in successfully")

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ObjectId as string

        Returns:
            User model or None if not found
        """
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None

        user_doc = await self.users_collection.find_one({"_id": object_id})

        if not user_doc:
            return None

        user_doc["_id"] = str(user_doc["_id"])
        return User(**user_doc)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email.

        Args:
            email: User email address

        Returns:
            User model or None if not found
        """
        user_doc = await self.users_collection.find_one({"email": email})

        if not user_doc:
            return None

        user_doc["_id"] = str(user_doc["_id"])
        return User(**user_doc)

    @staticmethod
    def to_user_response(user: User) -> UserResponse:
        return UserResponse(
            id=user.id,
            email=user.email,
            username=user.username,
            created_at=user.created_at,
        )

    def _auth_response(self, user: User, message: str) -> AuthResponse:
        token = create_access_token(
            user_id=user.id,
            email=user.email,
            username=user.username,
        )
        return AuthResponse(
            message=message,
            user=self.to_user_response(user),
            token=token,
        )
