"""
Read side of the trading ledgers: holdings, positions and orders.
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from tradedesk.database.databases import trading_db
from tradedesk.models.holding import Holding
from tradedesk.models.order import Order
from tradedesk.models.position import Position
from tradedesk.schemas.holding import HoldingResponse
from tradedesk.schemas.order import OrderResponse
from tradedesk.schemas.position import PositionResponse


def holding_to_response(holding_doc: dict) -> HoldingResponse:
    """Convert a holding document to its API representation."""
    holding = Holding(**{**holding_doc, "_id": str(holding_doc["_id"])})
    return HoldingResponse(
        id=holding.id,
        name=holding.name,
        qty=holding.qty,
        avg=holding.avg,
        price=holding.price,
        net=holding.net,
        day=holding.day,
    )


def position_to_response(position_doc: dict) -> PositionResponse:
    """Convert a position document to its API representation."""
    position = Position(**{**position_doc, "_id": str(position_doc["_id"])})
    return PositionResponse(
        id=position.id,
        product=position.product,
        name=position.name,
        qty=position.qty,
        avg=position.avg,
        price=position.price,
        net=position.net,
        day=position.day,
        is_loss=position.is_loss,
    )


def order_to_response(order_doc: dict) -> OrderResponse:
    """Convert an order document to its API representation."""
    order = Order(**{**order_doc, "_id": str(order_doc["_id"])})
    return OrderResponse(
        id=order.id,
        name=order.name,
        qty=order.qty,
        price=order.price,
        mode=order.mode,
        approved=order.approved,
        created_at=order.created_at,
    )


class LedgerService:
    """Projection queries over the trading collections."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with trading database."""
        self.db = db
        self.holdings = db[trading_db.Collections.HOLDINGS]
        self.positions = db[trading_db.Collections.POSITIONS]
        self.orders = db[trading_db.Collections.ORDERS]

    async def list_holdings(self) -> list[HoldingResponse]:
        """List every holding."""
        cursor = self.holdings.find({})
        docs = await cursor.to_list(length=None)
        return [holding_to_response(doc) for doc in docs]

    async def get_holding(self, name: str) -> Optional[HoldingResponse]:
        """Get the holding for a ticker, None if it is not held."""
        doc = await self.holdings.find_one({"name": name})
        if not doc:
            return None
        return holding_to_response(doc)

    async def list_positions(self) -> list[PositionResponse]:
        """List every position snapshot."""
        cursor = self.positions.find({})
        docs = await cursor.to_list(length=None)
        return [position_to_response(doc) for doc in docs]

    async def list_orders(self) -> list[OrderResponse]:
        """List the order log in insertion order."""
        cursor = self.orders.find({})
        docs = await cursor.to_list(length=None)
        return [order_to_response(doc) for doc in docs]
