"""
Finality Cache - Ledger Mock

Contract:
    - get_frontier() answers from ``frontier_script`` (consumed in order)
      and then from ``frontier``
    - get_range() answers from the ``finalized`` set, or raises
      ``range_error`` when one is set
    - UpstreamError instances in place of answers are raised
    - every call is recorded
"""

from collections import deque
from typing import Iterable, Optional

from finality_cache.core.errors import UpstreamError
from finality_cache.services.ledger import LedgerSource


class MockLedgerSource(LedgerSource):
    """Scriptable in-memory ledger."""

    def __init__(
        self,
        frontier: int | UpstreamError = 0,
        finalized: Optional[Iterable[int]] = None,
    ):
        self.frontier = frontier
        self.frontier_script: deque[int | UpstreamError] = deque()
        self.finalized: set[int] = set(finalized or ())
        self.range_error: Optional[UpstreamError] = None

        self.frontier_calls = 0
        self.range_calls: list[tuple[int, int]] = []
        self.closed = False

    async def get_frontier(self) -> int:
        self.frontier_calls += 1
        answer = self.frontier_script.popleft() if self.frontier_script else self.frontier
        if isinstance(answer, UpstreamError):
            raise answer
        return answer

    async def get_range(self, start_slot: int, end_slot: int) -> list[int]:
        self.range_calls.append((start_slot, end_slot))
        if self.range_error is not None:
            raise self.range_error
        return sorted(s for s in self.finalized if start_slot <= s <= end_slot)

    async def aclose(self) -> None:
        self.closed = True
