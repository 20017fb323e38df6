"""
Positions router.
"""
from fastapi import APIRouter, Depends

from tradedesk.routers.holdings import get_ledger_service
from tradedesk.schemas.position import PositionListResponse
from tradedesk.services.ledger_service import LedgerService

router = APIRouter(tags=["Positions"])


@router.get(
    "/addpositions",
    response_model=PositionListResponse,
    summary="List positions",
)
async def list_positions(ledger: LedgerService = Depends(get_ledger_service)):
    """List every position snapshot."""
    return PositionListResponse(data=await ledger.list_positions())
