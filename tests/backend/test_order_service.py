"""
Tests for OrderService against the in-memory trading database.

These tests cover:
- The BUY/SELL sequence keeping holdings in step with orders
- Rejected orders staying in the order log
- Version-checked holding writes under concurrent modification
"""

import pytest

from tradedesk.core.exceptions import ConcurrencyError, DomainError, ValidationError


class RacingCollection:
    """
    Wraps the holdings collection and lets another writer bump the holding
    right after each read, for the first ``races`` reads.
    """

    def __init__(self, inner, races: int = 1, qty_bump: int = 5):
        self.inner = inner
        self.races = races
        self.qty_bump = qty_bump

    def __getattr__(self, name):
        return getattr(self.inner, name)

    async def find_one(self, *args, **kwargs):
        doc = await self.inner.find_one(*args, **kwargs)
        if doc and self.races > 0:
            self.races -= 1
            await self.inner.update_one(
                {"_id": doc["_id"]},
                {"$inc": {"qty": self.qty_bump, "version": 1}},
            )
        return doc


class TestPlaceOrderSequence:
    """The BUY/BUY/SELL/SELL walk-through."""

    @pytest.mark.asyncio
    async def test_full_sequence(self, order_service, ledger_service, place):
        result = await place(order_service, "TCS", 10, 100.0, "BUY")
        assert (result.holding.qty, result.holding.avg) == (10, 100.0)

        result = await place(order_service, "TCS", 10, 200.0, "BUY")
        assert (result.holding.qty, result.holding.avg, result.holding.price) == (20, 150.0, 200.0)

        result = await place(order_service, "TCS", 5, 180.0, "SELL")
        assert (result.holding.qty, result.holding.avg, result.holding.price) == (15, 150.0, 180.0)

        result = await place(order_service, "TCS", 15, 190.0, "SELL")
        assert result.holding is None
        assert await ledger_service.get_holding("TCS") is None

        orders = await ledger_service.list_orders()
        assert [(o.mode, o.qty) for o in orders] == [
            ("BUY", 10), ("BUY", 10), ("SELL", 5), ("SELL", 15),
        ]

    @pytest.mark.asyncio
    async def test_first_buy_creates_holding_with_zero_display_fields(
        self, order_service, mock_trading_db, place
    ):
        await place(order_service, "INFY", 4, 1500.5, "BUY")

        doc = await mock_trading_db.holdings.find_one({"name": "INFY"})
        assert doc["qty"] == 4
        assert doc["avg"] == 1500.5
        assert doc["price"] == 1500.5
        assert doc["net"] == 0
        assert doc["day"] == 0
        assert doc["version"] == 0

    @pytest.mark.asyncio
    async def test_each_update_bumps_version(self, order_service, mock_trading_db, place):
        await place(order_service, "INFY", 4, 10.0, "BUY")
        await place(order_service, "INFY", 4, 20.0, "BUY")
        await place(order_service, "INFY", 1, 30.0, "SELL")

        doc = await mock_trading_db.holdings.find_one({"name": "INFY"})
        assert doc["version"] == 2

    @pytest.mark.asyncio
    async def test_tickers_are_independent(self, order_service, ledger_service, place):
        await place(order_service, "INFY", 10, 100.0, "BUY")
        await place(order_service, "TCS", 5, 300.0, "BUY")
        await place(order_service, "INFY", 10, 300.0, "BUY")

        infy = await ledger_service.get_holding("INFY")
        tcs = await ledger_service.get_holding("TCS")
        assert (infy.qty, infy.avg) == (20, 200.0)
        assert (tcs.qty, tcs.avg) == (5, 300.0)

    @pytest.mark.asyncio
    async def test_order_is_new_unapproved(self, order_service, place):
        result = await place(order_service, "INFY", 1, 10.0, "BUY")

        assert result.order.approved is False
        assert result.order.name == "INFY"
        assert result.order.id


class TestRejectedOrders:
    """Rejections leave holdings alone but keep the recorded order."""

    @pytest.mark.asyncio
    async def test_oversell_rejected_and_holding_untouched(
        self, order_service, mock_trading_db, mock_holding, place
    ):
        await mock_trading_db.holdings.insert_one(dict(mock_holding))

        with pytest.raises(DomainError, match="Cannot sell more than owned quantity"):
            await place(order_service, "TCS", 999, 190.0, "SELL")

        doc = await mock_trading_db.holdings.find_one({"name": "TCS"})
        assert doc["qty"] == 15
        assert doc["avg"] == 150.0
        assert doc["price"] == 180.0
        assert doc["version"] == mock_holding["version"]

        # Current behaviour: the order log keeps the rejected order
        orders = await mock_trading_db.orders.find({}).to_list(length=None)
        assert len(orders) == 1
        assert orders[0]["qty"] == 999
        assert orders[0]["mode"] == "SELL"

    @pytest.mark.asyncio
    async def test_sell_without_holding_creates_nothing(
        self, order_service, mock_trading_db, place
    ):
        with pytest.raises(DomainError, match="Cannot sell stock that is not owned"):
            await place(order_service, "WIPRO", 1, 400.0, "SELL")

        assert await mock_trading_db.holdings.count_documents({}) == 0
        assert await mock_trading_db.orders.count_documents({"name": "WIPRO"}) == 1

    @pytest.mark.asyncio
    async def test_invalid_order_writes_nothing(self, order_service, mock_trading_db, place):
        with pytest.raises(ValidationError, match="Mode must be BUY or SELL"):
            await place(order_service, "INFY", 10, 100.0, "HOLD")

        assert await mock_trading_db.orders.count_documents({}) == 0
        assert await mock_trading_db.holdings.count_documents({}) == 0


class TestConcurrentHoldingUpdates:
    """Version checks turn lost updates into retries."""

    @pytest.mark.asyncio
    async def test_stale_update_is_retried_on_fresh_holding(
        self, order_service, mock_trading_db, mock_holding, place
    ):
        await mock_trading_db.holdings.insert_one(dict(mock_holding))
        order_service.holdings = RacingCollection(order_service.holdings, races=1, qty_bump=5)

        result = await place(order_service, "TCS", 5, 200.0, "SELL")

        # 15 held, +5 from the concurrent writer, -5 sold
        assert result.holding.qty == 15
        doc = await mock_trading_db.holdings.find_one({"name": "TCS"})
        assert doc["qty"] == 15
        assert doc["version"] == mock_holding["version"] + 2

    @pytest.mark.asyncio
    async def test_stale_delete_is_retried(
        self, order_service, mock_trading_db, mock_holding, place
    ):
        await mock_trading_db.holdings.insert_one(dict(mock_holding))
        order_service.holdings = RacingCollection(order_service.holdings, races=1, qty_bump=5)

        result = await place(order_service, "TCS", 15, 200.0, "SELL")

        # The delete lost the race; on retry 5 shares remain
        assert result.holding.qty == 5

    @pytest.mark.asyncio
    async def test_holding_without_version_field_can_be_updated(
        self, order_service, mock_trading_db, mock_holding, place
    ):
        legacy = dict(mock_holding)
        del legacy["version"]
        await mock_trading_db.holdings.insert_one(legacy)

        result = await place(order_service, "TCS", 5, 100.0, "BUY")

        assert result.holding.qty == 20
        doc = await mock_trading_db.holdings.find_one({"name": "TCS"})
        assert doc["version"] == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(
        self, order_service, mock_trading_db, mock_holding, place
    ):
        await mock_trading_db.holdings.insert_one(dict(mock_holding))
        order_service.holdings = RacingCollection(order_service.holdings, races=100)

        with pytest.raises(ConcurrencyError):
            await place(order_service, "TCS", 1, 200.0, "BUY")

    @pytest.mark.asyncio
    async def test_concurrent_first_buy_falls_back_to_update(
        self, order_service, mock_trading_db, place
    ):
        class CreatedMeanwhile:
            """Pretends the holding does not exist on the first read only."""

            def __init__(self, inner):
                self.inner = inner
                self.first = True

            def __getattr__(self, name):
                return getattr(self.inner, name)

            async def find_one(self, *args, **kwargs):
                if self.first:
                    self.first = False
                    await self.inner.insert_one({
                        "name": "INFY", "qty": 10, "avg": 100.0, "price": 100.0,
                        "net": 0, "day": 0, "version": 0,
                    })
                    return None
                return await self.inner.find_one(*args, **kwargs)

        order_service.holdings = CreatedMeanwhile(order_service.holdings)

        result = await place(order_service, "INFY", 10, 200.0, "BUY")

        assert result.holding.qty == 20
        assert result.holding.avg == 150.0
        assert await mock_trading_db.holdings.count_documents({"name": "INFY"}) == 1
