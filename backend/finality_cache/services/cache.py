"""
Finality Cache - Slot Cache

Bounded in-memory set of finalized slots with FIFO eviction.

Admission order follows ledger order (the poller admits ascending ranges),
so the oldest admissions are the least likely to be queried again and are
evicted first. Re-adding a present slot does not renew it.
"""

import logging
from collections import deque
from typing import Iterable

from finality_cache.core.locks import ReadWriteLock

logger = logging.getLogger(__name__)


class SlotCache:
    """
    Membership cache shared by the poller (sole writer) and the
    resolver (readers).

    Invariants:
    - every slot in ``_slots`` appears exactly once in ``_order`` and vice versa
    - ``len(_order) <= capacity`` once ``add_slots`` returns
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._slots: set[int] = set()
        self._order: deque[int] = deque()
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        return len(self._order)

    async def contains(self, slot: int) -> bool:
        async with self._lock.read():
            return slot in self._slots

    async def add_slots(self, new_slots: Iterable[int]) -> None:
        """Admit unseen slots in iteration order, then evict the oldest over capacity."""
        new_slots = list(new_slots)
        if not new_slots:
            return

        async with self._lock.write():
            for slot in new_slots:
                if slot not in self._slots:
                    self._slots.add(slot)
                    self._order.append(slot)

            while len(self._order) > self.capacity:
                oldest_slot = self._order.popleft()
                self._slots.remove(oldest_slot)

            size = len(self._slots)

        logger.debug(f"Cache updated. New size: {size}")

    async def snapshot(self) -> list[int]:
        """Cached slots in admission order, oldest first."""
        async with self._lock.read():
            return list(self._order)
