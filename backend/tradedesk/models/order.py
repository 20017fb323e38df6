"""
Order model for trading database.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OrderMode(str, Enum):
    """Order direction."""
    BUY = "BUY"
    SELL = "SELL"


class Order(BaseModel):
    """
    Order document model for MongoDB trading_db.orders collection.
    Immutable once written, apart from the approval flag.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    name: str = Field(..., description="Ticker symbol")
    qty: int = Field(..., gt=0, description="Number of shares")
    price: float = Field(..., gt=0, description="Price per share")
    mode: OrderMode = Field(..., description="BUY or SELL")
    approved: bool = Field(default=False, description="Flipped by the approval sweep")
    approved_at: Optional[datetime] = None
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When this record was created"
    )

    class Config:
        populate_by_name = True
        use_enum_values = True
