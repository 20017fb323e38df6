"""
Orders router: order placement and the order log.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from tradedesk.config import get_settings
from tradedesk.core.exceptions import ConcurrencyError, DomainError, ValidationError
from tradedesk.dependencies.database import get_trading_db
from tradedesk.routers.holdings import get_ledger_service
from tradedesk.schemas.order import OrderCreate, OrderListResponse, OrderPlacedResponse
from tradedesk.services.ledger_service import LedgerService
from tradedesk.services.order_service import OrderService

router = APIRouter(tags=["Orders"])


async def get_order_service(
    db: AsyncIOMotorDatabase = Depends(get_trading_db),
) -> OrderService:
    """Dependency to get OrderService instance."""
    return OrderService(db)


@router.post(
    "/newOrder",
    response_model=OrderPlacedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
)
async def place_order(
    body: OrderCreate,
    order_service: OrderService = Depends(get_order_service),
):
    """
    Record a BUY or SELL order and update the holding for the ticker.

    - **name**: Ticker symbol
    - **qty**: Positive integer quantity
    - **price**: Positive price per share
    - **mode**: `BUY` or `SELL`

    A SELL that exceeds the held quantity, or targets a ticker that is not
    held, is rejected after the order has been recorded.
    """
    try:
        return await order_service.place_order(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except ConcurrencyError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except DomainError as e:
        raise HTTPException(
            status_code=get_settings().order_rejection_status_code,
            detail=str(e),
        )


@router.get(
    "/addOrders",
    response_model=OrderListResponse,
    summary="List orders",
)
@router.get(
    "/getOrders",
    response_model=OrderListResponse,
    summary="List orders",
    include_in_schema=False,
)
async def list_orders(ledger: LedgerService = Depends(get_ledger_service)):
    """List the order log in the order it was written."""
    return OrderListResponse(data=await ledger.list_orders())
