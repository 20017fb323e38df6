"""
Order placement: records the order, then folds it into the holdings ledger.

Holding arithmetic:
- BUY on an existing holding recomputes the weighted average cost
  ``(avg * qty + price * order_qty) / (qty + order_qty)``.
- SELL lowers the quantity and leaves the average untouched; selling the
  whole holding deletes it.
- Overselling, or selling a ticker that is not held, is rejected.

The order is written before the holding is touched and is kept when the
holding update is rejected, so the order log can contain orders that never
reached the holdings ledger.

Every holding write is conditioned on the ``version`` it was read at. A
write that loses a race re-reads the holding and applies the order again.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from tradedesk.config import get_settings
from tradedesk.core.exceptions import ConcurrencyError, DomainError, ValidationError
from tradedesk.database.databases import trading_db
from tradedesk.models.holding import Holding
from tradedesk.models.order import OrderMode
from tradedesk.schemas.holding import HoldingResponse
from tradedesk.schemas.order import OrderCreate, OrderPlacedResponse
from tradedesk.services.ledger_service import holding_to_response, order_to_response

logger = logging.getLogger(__name__)

# Largest quantity a BSON int64 can hold
MAX_ORDER_QTY = 2**63 - 1


class HoldingAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass
class HoldingChange:
    """What an order does to the holding of its ticker."""
    action: HoldingAction
    qty: int = 0
    avg: float = 0.0
    price: float = 0.0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_order(name: Any, qty: Any, price: Any, mode: Any) -> tuple[str, int, float, OrderMode]:
    """
    Check a raw order request, stopping at the first problem.

    Returns:
        Normalised (name, qty, price, mode)

    Raises:
        ValidationError: Describing the first failing check
    """
    if not name or not qty or not price or not mode:
        raise ValidationError("Missing required fields")

    if not isinstance(name, str):
        raise ValidationError("Name must be a string")

    if (
        not _is_number(qty)
        or not math.isfinite(qty)
        or not float(qty).is_integer()
        or not 0 < qty <= MAX_ORDER_QTY
    ):
        raise ValidationError("Quantity must be a positive integer")

    if not _is_number(price) or not math.isfinite(price) or price <= 0:
        raise ValidationError("Price must be a positive number")

    if mode not in (OrderMode.BUY.value, OrderMode.SELL.value):
        raise ValidationError("Mode must be BUY or SELL")

    return name, int(qty), float(price), OrderMode(mode)


def apply_order(
    holding: Optional[Holding], qty: int, price: float, mode: OrderMode
) -> HoldingChange:
    """
    Work out the holding change caused by an order.

    Args:
        holding: Current holding for the ticker, None if not held
        qty: Order quantity
        price: Order price
        mode: BUY or SELL

    Raises:
        DomainError: If the order sells more than is held
    """
    if holding is None:
        if mode == OrderMode.BUY:
            return HoldingChange(HoldingAction.CREATE, qty=qty, avg=price, price=price)
        raise DomainError("Cannot sell stock that is not owned")

    if mode == OrderMode.BUY:
        total_qty = holding.qty + qty
        total_cost = holding.avg * holding.qty + price * qty
        return HoldingChange(
            HoldingAction.UPDATE,
            qty=total_qty,
            avg=total_cost / total_qty,
            price=price,
        )

    remaining = holding.qty - qty
    if remaining > 0:
        return HoldingChange(HoldingAction.UPDATE, qty=remaining, avg=holding.avg, price=price)
    if remaining == 0:
        return HoldingChange(HoldingAction.DELETE)
    raise DomainError("Cannot sell more than owned quantity")


class OrderService:
    """Service for placing orders against the holdings ledger."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with trading database."""
        self.db = db
        self.orders = db[trading_db.Collections.ORDERS]
        self.holdings = db[trading_db.Collections.HOLDINGS]
        self.settings = get_settings()

    async def place_order(self, request: OrderCreate) -> OrderPlacedResponse:
        """
        Record an order and update the holding for its ticker.

        Raises:
            ValidationError: If the request is malformed (nothing is written)
            DomainError: If the holding rejects the order (order already written)
            ConcurrencyError: If the holding kept changing between retries
        """
        name, qty, price, mode = validate_order(
            request.name, request.qty, request.price, request.mode
        )

        order_doc = {
            "name": name,
            "qty": qty,
            "price": price,
            "mode": mode.value,
            "approved": False,
            "approved_at": None,
            "created_at": datetime.now(timezone.utc),
        }
        result = await self.orders.insert_one(order_doc)
        order_doc["_id"] = result.inserted_id
        logger.info("Recorded order %s: %s %d %s @ %s", result.inserted_id, mode.value, qty, name, price)

        try:
            holding = await self._update_holding(name, qty, price, mode)
        except DomainError as e:
            logger.warning("Order %s rejected by holdings ledger: %s", result.inserted_id, e)
            raise

        return OrderPlacedResponse(order=order_to_response(order_doc), holding=holding)

    async def _update_holding(
        self, name: str, qty: int, price: float, mode: OrderMode
    ) -> Optional[HoldingResponse]:
        """Apply the order to the holding, retrying when a concurrent write wins."""
        attempts = max(1, self.settings.holding_update_max_retries)

        for attempt in range(1, attempts + 1):
            doc = await self.holdings.find_one({"name": name})
            holding = Holding(**{**doc, "_id": str(doc["_id"])}) if doc else None
            change = apply_order(holding, qty, price, mode)
            now = datetime.now(timezone.utc)

            if change.action == HoldingAction.CREATE:
                holding_doc = {
                    "name": name,
                    "qty": change.qty,
                    "avg": change.avg,
                    "price": change.price,
                    "net": 0,
                    "day": 0,
                    "version": 0,
                    "created_at": now,
                    "updated_at": now,
                }
                try:
                    inserted = await self.holdings.insert_one(holding_doc)
                except DuplicateKeyError:
                    logger.info("Holding %s created concurrently, retrying (attempt %d)", name, attempt)
                    continue
                holding_doc["_id"] = inserted.inserted_id
                logger.info("Opened holding %s", name)
                return holding_to_response(holding_doc)

            # A null version also matches holdings written without one
            current = {"_id": doc["_id"], "version": doc.get("version")}

            if change.action == HoldingAction.DELETE:
                result = await self.holdings.delete_one(current)
                if result.deleted_count:
                    logger.info("Closed holding %s", name)
                    return None
            else:
                updated = await self.holdings.find_one_and_update(
                    current,
                    {
                        "$set": {
                            "qty": change.qty,
                            "avg": change.avg,
                            "price": change.price,
                            "updated_at": now,
                        },
                        "$inc": {"version": 1},
                    },
                    return_document=ReturnDocument.AFTER,
                )
                if updated:
                    return holding_to_response(updated)

            logger.info("Holding %s changed concurrently, retrying (attempt %d)", name, attempt)

        raise ConcurrencyError(f"Holding {name} was modified concurrently, please retry the order")
