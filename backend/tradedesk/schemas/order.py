"""
Order request/response schemas.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from tradedesk.schemas.holding import HoldingResponse


class OrderCreate(BaseModel):
    """
    Place order request.

    Fields accept raw JSON values; type and range checks are done by the
    order service so that errors come back as a single message.
    """
    name: Any = Field(None, description="Ticker symbol")
    qty: Any = Field(None, description="Positive integer quantity")
    price: Any = Field(None, description="Positive price per share")
    mode: Any = Field(None, description="BUY or SELL")


class OrderResponse(BaseModel):
    """Order as returned by the API."""
    id: str = Field(..., description="Order ID")
    name: str = Field(..., description="Ticker symbol")
    qty: int = Field(..., description="Quantity")
    price: float = Field(..., description="Trade price")
    mode: str = Field(..., description="BUY or SELL")
    approved: bool = Field(default=False, description="Set by the approval sweep")
    created_at: datetime = Field(..., description="Record creation time")


class OrderPlacedResponse(BaseModel):
    """Result of a successful order placement."""
    success: bool = True
    message: str = "Order placed and holdings updated successfully"
    order: OrderResponse
    holding: Optional[HoldingResponse] = Field(
        None,
        description="Holding after the update, null when it was closed out"
    )


class OrderListResponse(BaseModel):
    success: bool = True
    data: list[OrderResponse]
