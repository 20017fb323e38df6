"""
Request and response schemas for API endpoints.
"""
from tradedesk.schemas.auth import (
    SignupRequest,
    LoginRequest,
    UserResponse,
    AuthResponse,
    MessageResponse,
)
from tradedesk.schemas.holding import (
    HoldingResponse,
    HoldingListResponse,
    HoldingDetailResponse,
)
from tradedesk.schemas.position import PositionResponse, PositionListResponse
from tradedesk.schemas.order import (
    OrderCreate,
    OrderResponse,
    OrderPlacedResponse,
    OrderListResponse,
)

__all__ = [
    # Auth
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "MessageResponse",
    # Holdings
    "HoldingResponse",
    "HoldingListResponse",
    "HoldingDetailResponse",
    # Positions
    "PositionResponse",
    "PositionListResponse",
    # Orders
    "OrderCreate",
    "OrderResponse",
    "OrderPlacedResponse",
    "OrderListResponse",
]
