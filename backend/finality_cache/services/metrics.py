"""
Finality Cache - Metrics Sink

Fire-and-forget observations. Nothing in the core reads them back.
"""

import logging
from abc import ABC, abstractmethod

metrics_logger = logging.getLogger("finality_cache.metrics")


class Metrics(ABC):

    @abstractmethod
    def record_latest_slot(self, slot: int) -> None:
        """Gauge: newest frontier the poller has incorporated."""

    @abstractmethod
    def record_get_blocks_elapsed(self, elapsed: float) -> None:
        """Seconds spent fetching a poll range."""

    @abstractmethod
    def record_is_slot_confirmed_elapsed(self, elapsed: float) -> None:
        """Seconds spent resolving one query, fallback included."""


class LoggingMetrics(Metrics):
    """Emits every observation as a log record on ``finality_cache.metrics``."""

    def record_latest_slot(self, slot: int) -> None:
        metrics_logger.info(
            f"Poller: latest slot {slot}", extra={"latest_slot": slot}
        )

    def record_get_blocks_elapsed(self, elapsed: float) -> None:
        elapsed_ms = int(elapsed * 1_000)
        metrics_logger.info(
            f"Poller: get_blocks duration {elapsed_ms}ms",
            extra={"elapsed_ms": elapsed_ms},
        )

    def record_is_slot_confirmed_elapsed(self, elapsed: float) -> None:
        elapsed_us = int(elapsed * 1_000_000)
        metrics_logger.info(
            f"Handler: is_slot_confirmed duration {elapsed_us}us",
            extra={"elapsed_us": elapsed_us},
        )
