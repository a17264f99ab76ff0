"""
Finality Cache - Metrics & Logging Tests

The production sink writes to the ``finality_cache.metrics`` logger with
ms for range fetches and µs for queries.
"""

import logging

import pytest

from finality_cache.core.logging import DATE_FORMAT, LOG_FORMAT, configure_logging
from finality_cache.services.metrics import LoggingMetrics

METRICS_LOGGER = "finality_cache.metrics"


@pytest.fixture
def metrics_records(caplog):
    caplog.set_level(logging.INFO, logger=METRICS_LOGGER)
    return caplog


class TestLoggingMetrics:
    """Observations land on the metrics logger with converted units."""

    def test_latest_slot(self, metrics_records):
        """Frontier gauge is logged with the slot as a structured field."""
        LoggingMetrics().record_latest_slot(250_000_000)

        (record,) = metrics_records.records
        assert record.name == METRICS_LOGGER
        assert record.levelno == logging.INFO
        assert record.__dict__["latest_slot"] == 250_000_000

    def test_get_blocks_elapsed_in_ms(self, metrics_records):
        """Range fetch durations are reported in whole milliseconds."""
        LoggingMetrics().record_get_blocks_elapsed(0.0025)

        (record,) = metrics_records.records
        assert record.name == METRICS_LOGGER
        assert record.__dict__["elapsed_ms"] == 2
        assert "2ms" in record.getMessage()

    def test_query_elapsed_in_us(self, metrics_records):
        """Query durations are reported in whole microseconds."""
        LoggingMetrics().record_is_slot_confirmed_elapsed(0.0025)

        (record,) = metrics_records.records
        assert record.name == METRICS_LOGGER
        assert record.__dict__["elapsed_us"] == 2500
        assert "2500us" in record.getMessage()


class TestConfigureLogging:
    """Service-wide log setup."""

    @pytest.fixture(autouse=True)
    def restore_levels(self):
        names = ("httpx", "httpcore")
        saved = {name: logging.getLogger(name).level for name in names}
        yield
        for name, level in saved.items():
            logging.getLogger(name).setLevel(level)

    def test_http_client_loggers_quieted(self):
        """httpx/httpcore stay at WARNING even when the service logs at DEBUG."""
        configure_logging("debug")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_log_format(self):
        """Records render as ``[time] [LEVEL] [logger]: message``."""
        formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
        record = logging.LogRecord(
            METRICS_LOGGER, logging.INFO, __file__, 1, "Poller: latest slot 7", None, None
        )

        rendered = formatter.format(record)

        assert rendered.endswith("] [INFO] [finality_cache.metrics]: Poller: latest slot 7")
        assert rendered.startswith("[")
