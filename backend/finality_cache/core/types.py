"""
Finality Cache - Canonical Types
================================

Slots are non-negative integers in the u64 range (MAX_SLOT).
Strictly ordered, unique, gaps allowed.
"""

from enum import Enum

MAX_SLOT = 2**64 - 1


class ConfirmationStatus(str, Enum):
    """Outcome of a single "is this slot finalized?" query."""
    CONFIRMED = "CONFIRMED"
    NOT_CONFIRMED = "NOT_CONFIRMED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"

    @property
    def http_status(self) -> int:
        return {
            ConfirmationStatus.CONFIRMED: 200,
            ConfirmationStatus.NOT_CONFIRMED: 404,
            ConfirmationStatus.UPSTREAM_ERROR: 500,
        }[self]


class PollOutcome(str, Enum):
    """What a single poller tick did."""
    FRONTIER_ERROR = "FRONTIER_ERROR"  # tick skipped
    UP_TO_DATE = "UP_TO_DATE"  # frontier <= watermark
    RANGE_ERROR = "RANGE_ERROR"  # watermark held, range retried next tick
    ADVANCED = "ADVANCED"
