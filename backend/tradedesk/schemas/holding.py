"""
Holding response schemas.
"""
from typing import Optional, Union

from pydantic import BaseModel, Field


class HoldingResponse(BaseModel):
    """Holding as returned by the API."""
    id: str = Field(..., description="Holding ID")
    name: str = Field(..., description="Ticker symbol")
    qty: int = Field(..., description="Shares held")
    avg: float = Field(..., description="Weighted average cost")
    price: float = Field(..., description="Last trade price")
    net: Union[float, str] = 0
    day: Union[float, str] = 0


class HoldingListResponse(BaseModel):
    """All holdings."""
    success: bool = True
    data: list[HoldingResponse]


class HoldingDetailResponse(BaseModel):
    """One holding, or null when the ticker is not held."""
    success: bool = True
    data: Optional[HoldingResponse] = None
