"""
Background sweep approving pending orders.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from tradedesk.database.databases import trading_db

logger = logging.getLogger(__name__)


class ApprovalSweeper:
    """
    Periodically flips every unapproved order to approved.

    Owned by the application lifespan: ``start()`` on startup, ``stop()``
    on shutdown.
    """

    def __init__(self, db: AsyncIOMotorDatabase, interval_seconds: float = 10.0):
        self.orders = db[trading_db.Collections.ORDERS]
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sweep_once(self) -> int:
        """Approve all pending orders, returning how many were approved."""
        result = await self.orders.update_many(
            {"approved": False},
            {"$set": {"approved": True, "approved_at": datetime.now(timezone.utc)}},
        )
        if result.modified_count:
            logger.info("Approved %d pending orders", result.modified_count)
        return result.modified_count

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.sweep_once()
            except asyncio.CancelledError:
                raise
            except PyMongoError as e:
                logger.error("Approval sweep failed: %s", e)
            except Exception:
                logger.exception("Unexpected error in approval sweep")

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self.running:
            return
        logger.info("Starting approval sweep every %ss", self.interval_seconds)
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Approval sweep stopped")
