"""
Authentication request/response schemas.

Request fields are optional so that the service can report every missing
or malformed field in one response.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Signup request body."""
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="Password (min 8 characters)")
    username: Optional[str] = Field(None, description="Username (min 3 characters)")


class LoginRequest(BaseModel):
    """Login request body."""
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


class UserResponse(BaseModel):
    """User information response (excludes the password hash)."""
    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User email")
    username: str = Field(..., description="Username")
    created_at: datetime = Field(..., description="Account creation date")


class AuthResponse(BaseModel):
    """Signup/login response; the token is also set as a cookie."""
    success: bool = True
    message: str = Field(..., description="Outcome message")
    user: UserResponse
    token: str = Field(..., description="JWT session token")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    success: bool = True
    message: str
