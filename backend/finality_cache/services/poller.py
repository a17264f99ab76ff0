"""
Finality Cache - Slot Poller

Background synchronizer. Owns the watermark: the highest slot for which
every finalized slot up to it has been fetched and admitted to the cache.

Each tick:
1. fetch the frontier (failure -> skip the tick)
2. frontier <= watermark -> nothing to do
3. fetch (watermark, frontier] (failure -> keep the watermark, the same
   range is retried next tick)
4. admit the slots, record metrics, advance watermark to frontier

The watermark only moves after a complete ingestion of its range, so the
cache never has silent gaps below it.
"""

import asyncio
import logging
import time
from typing import Optional

from finality_cache.core.errors import UpstreamError
from finality_cache.core.types import PollOutcome
from finality_cache.services.cache import SlotCache
from finality_cache.services.ledger import LedgerSource
from finality_cache.services.metrics import Metrics

logger = logging.getLogger(__name__)


class SlotPoller:

    def __init__(
        self,
        cache: SlotCache,
        ledger: LedgerSource,
        metrics: Metrics,
        interval: float = 2.0,
        lookback: int = 10,
        startup_backoff: float = 5.0,
        retry_startup: bool = False,
    ):
        self.cache = cache
        self.ledger = ledger
        self.metrics = metrics
        self.interval = interval
        self.lookback = lookback
        self.startup_backoff = startup_backoff
        self.retry_startup = retry_startup

        self.watermark: Optional[int] = None
        self.latest_frontier: Optional[int] = None

    async def initialize(self) -> bool:
        """
        Set the initial watermark to ``frontier - lookback`` (clamped at 0).

        On failure, waits ``startup_backoff`` and returns False.
        """
        try:
            slot = await self.ledger.get_frontier()
        except UpstreamError as e:
            logger.error(
                f"[POLLER] Failed to get initial slot: {e}. "
                f"Retrying in {self.startup_backoff}s."
            )
            await asyncio.sleep(self.startup_backoff)
            return False

        logger.info(f"[POLLER] Initial slot fetched: {slot}")
        self.latest_frontier = slot
        self.watermark = max(slot - self.lookback, 0)
        return True

    async def tick(self) -> PollOutcome:
        if self.watermark is None:
            raise RuntimeError("SlotPoller.tick() called before initialize()")

        started = time.perf_counter()

        try:
            frontier = await self.ledger.get_frontier()
        except UpstreamError as e:
            logger.warning(f"[POLLER] Failed to get latest slot: {e}. Skipping this poll.")
            return PollOutcome.FRONTIER_ERROR

        self.latest_frontier = frontier
        if frontier <= self.watermark:
            return PollOutcome.UP_TO_DATE

        start_slot = self.watermark + 1
        end_slot = frontier

        try:
            new_slots = await self.ledger.get_range(start_slot, end_slot)
        except UpstreamError as e:
            logger.warning(
                f"[POLLER] Failed to get blocks ({start_slot}-{end_slot}): {e}. "
                "Retrying on next poll."
            )
            return PollOutcome.RANGE_ERROR

        self.metrics.record_get_blocks_elapsed(time.perf_counter() - started)
        self.metrics.record_latest_slot(end_slot)

        logger.info(
            f"[POLLER] Fetched {len(new_slots)} new confirmed slots "
            f"(range {start_slot}-{end_slot})."
        )
        await self.cache.add_slots(new_slots)

        self.watermark = end_slot
        return PollOutcome.ADVANCED

    async def run(self) -> None:
        """
        Poll until cancelled.

        Without ``retry_startup`` a failed initial frontier fetch ends the
        loop for good and queries are served from RPC fallback only.
        """
        logger.info("[POLLER] Cache poller started.")
        try:
            while not await self.initialize():
                if not self.retry_startup:
                    logger.error(
                        "[POLLER] Giving up after failed startup; "
                        "queries will use RPC fallback only."
                    )
                    return

            while True:
                await asyncio.sleep(self.interval)
                await self.tick()
        except asyncio.CancelledError:
            logger.info(f"[POLLER] Cache poller stopped at watermark {self.watermark}.")
            raise
