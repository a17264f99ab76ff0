"""
Finality Cache - Confirmation Resolver

Read-through policy for "is slot N finalized?":
1. cache hit -> CONFIRMED, no RPC call
2. miss -> getBlocks(N, N): non-empty -> CONFIRMED, empty -> NOT_CONFIRMED
3. RPC failure -> UPSTREAM_ERROR (never retried here)

Fallback hits are not written back to the cache; the poller stays the
only writer.
"""

import logging
import time

from finality_cache.core.errors import UpstreamError
from finality_cache.core.types import ConfirmationStatus
from finality_cache.services.cache import SlotCache
from finality_cache.services.ledger import LedgerSource
from finality_cache.services.metrics import Metrics

logger = logging.getLogger(__name__)


class ConfirmationResolver:

    def __init__(self, cache: SlotCache, ledger: LedgerSource, metrics: Metrics):
        self.cache = cache
        self.ledger = ledger
        self.metrics = metrics

    async def is_confirmed(self, slot: int) -> ConfirmationStatus:
        """Resolve one query; elapsed time is recorded exactly once, whatever the outcome."""
        started = time.perf_counter()
        try:
            return await self._resolve(slot)
        finally:
            self.metrics.record_is_slot_confirmed_elapsed(time.perf_counter() - started)

    async def _resolve(self, slot: int) -> ConfirmationStatus:
        if await self.cache.contains(slot):
            logger.info(f"[RESOLVER] Cache HIT for slot {slot}")
            return ConfirmationStatus.CONFIRMED
        logger.info(f"[RESOLVER] Cache MISS for slot {slot}")

        try:
            slots = await self.ledger.get_range(slot, slot)
        except UpstreamError as e:
            logger.warning(f"[RESOLVER] RPC error checking slot {slot}: {e}")
            return ConfirmationStatus.UPSTREAM_ERROR

        if slots:
            logger.info(f"[RESOLVER] RPC HIT for slot {slot}")
            return ConfirmationStatus.CONFIRMED

        logger.info(f"[RESOLVER] RPC MISS for slot {slot}")
        return ConfirmationStatus.NOT_CONFIRMED
