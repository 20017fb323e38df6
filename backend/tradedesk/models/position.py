"""
Position snapshot model for trading database.
"""
from typing import Optional, Union

from pydantic import BaseModel, Field


class Position(BaseModel):
    """
    Read-only position snapshot stored in trading_db.positions.
    Nothing in the service writes these; they are loaded externally.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    product: Optional[str] = Field(None, description="Product type, e.g. CNC or MIS")
    name: str = Field(..., description="Ticker symbol")
    qty: int = Field(..., description="Quantity")
    avg: float = Field(..., description="Average price")
    price: float = Field(..., description="Last price")
    net: Union[float, str] = 0
    day: Union[float, str] = 0
    is_loss: bool = Field(default=False, alias="isLoss")

    class Config:
        populate_by_name = True
