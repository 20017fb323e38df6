"""
Position response schemas.
"""
from typing import Optional, Union

from pydantic import BaseModel


class PositionResponse(BaseModel):
    """Position snapshot as returned by the API."""
    id: str
    product: Optional[str] = None
    name: str
    qty: int
    avg: float
    price: float
    net: Union[float, str] = 0
    day: Union[float, str] = 0
    is_loss: bool = False


class PositionListResponse(BaseModel):
    success: bool = True
    data: list[PositionResponse]
