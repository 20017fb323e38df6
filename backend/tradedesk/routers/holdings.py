"""
Holdings router.
"""
from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from tradedesk.dependencies.database import get_trading_db
from tradedesk.schemas.holding import HoldingDetailResponse, HoldingListResponse
from tradedesk.services.ledger_service import LedgerService

router = APIRouter(tags=["Holdings"])


async def get_ledger_service(
    db: AsyncIOMotorDatabase = Depends(get_trading_db),
) -> LedgerService:
    """Dependency to get LedgerService instance."""
    return LedgerService(db)


@router.get(
    "/addholdings",
    response_model=HoldingListResponse,
    summary="List holdings",
)
async def list_holdings(ledger: LedgerService = Depends(get_ledger_service)):
    """List every holding in the ledger."""
    return HoldingListResponse(data=await ledger.list_holdings())


@router.get(
    "/holding/{stock_name}",
    response_model=HoldingDetailResponse,
    summary="Get holding by ticker",
)
async def get_holding(
    stock_name: str,
    ledger: LedgerService = Depends(get_ledger_service),
):
    """
    Get the holding for one ticker.

    Returns `data: null` when the ticker is not held.
    """
    return HoldingDetailResponse(data=await ledger.get_holding(stock_name))
