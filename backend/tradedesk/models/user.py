"""
User model for authentication database.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """
    User document model for MongoDB auth_db.users collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    email: str = Field(..., description="Unique, lower-cased email address")
    username: str = Field(..., description="Unique username")
    hashed_password: str = Field(..., description="Bcrypt hashed password")
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Account creation timestamp"
    )

    class Config:
        populate_by_name = True
