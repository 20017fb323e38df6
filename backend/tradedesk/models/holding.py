"""
Holding model for trading database.
"""
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field


class Holding(BaseModel):
    """
    Aggregate position for one ticker, stored in trading_db.holdings.

    A holding with zero quantity is deleted rather than stored.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    name: str = Field(..., description="Ticker symbol, unique across the ledger")
    qty: int = Field(..., gt=0, description="Shares held")
    avg: float = Field(..., description="Weighted average cost basis")
    price: float = Field(..., description="Last trade price")
    net: Union[float, str] = Field(default=0, description="Net change, display only")
    day: Union[float, str] = Field(default=0, description="Day change, display only")
    version: int = Field(default=0, description="Optimistic concurrency counter")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
