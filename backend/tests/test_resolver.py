"""
Finality Cache - Confirmation Resolver Tests

- cache hit never calls the ledger
- miss falls back to a single-slot range query
- elapsed time recorded exactly once per query
"""

import logging

import pytest

from finality_cache.core.errors import UpstreamError
from finality_cache.core.types import ConfirmationStatus
from finality_cache.services.cache import SlotCache
from finality_cache.services.resolver import ConfirmationResolver


@pytest.fixture
def resolver(ledger, metrics):
    return ConfirmationResolver(SlotCache(capacity=10), ledger, metrics)


class TestCacheHit:
    """Fast path served from the cache."""

    @pytest.mark.asyncio
    async def test_hit_skips_ledger(self, resolver, ledger, metrics):
        """A cache hit confirms without a ledger call."""
        await resolver.cache.add_slots([12345])

        assert await resolver.is_confirmed(12345) == ConfirmationStatus.CONFIRMED
        assert ledger.range_calls == []
        assert len(metrics.is_slot_confirmed_elapsed) == 1


class TestFallback:
    """Cache misses fall back to a single-slot range query."""

    @pytest.mark.asyncio
    async def test_miss_with_finalized_slot(self, resolver, ledger, metrics):
        """A miss confirmed by the ledger is CONFIRMED."""
        ledger.finalized = {54321}

        assert await resolver.is_confirmed(54321) == ConfirmationStatus.CONFIRMED
        assert ledger.range_calls == [(54321, 54321)]
        assert len(metrics.is_slot_confirmed_elapsed) == 1

    @pytest.mark.asyncio
    async def test_miss_with_empty_range(self, resolver, ledger, metrics):
        """A miss with an empty ledger range is NOT_CONFIRMED."""
        assert await resolver.is_confirmed(99999) == ConfirmationStatus.NOT_CONFIRMED
        assert ledger.range_calls == [(99999, 99999)]
        assert len(metrics.is_slot_confirmed_elapsed) == 1

    @pytest.mark.asyncio
    async def test_miss_with_upstream_error(self, resolver, ledger, metrics):
        """A miss with a failing ledger is UPSTREAM_ERROR."""
        ledger.range_error = UpstreamError("getBlocks", "transport error: timeout")

        assert await resolver.is_confirmed(11111) == ConfirmationStatus.UPSTREAM_ERROR
        assert ledger.range_calls == [(11111, 11111)]
        assert len(metrics.is_slot_confirmed_elapsed) == 1

    @pytest.mark.asyncio
    async def test_fallback_hit_is_not_cached(self, resolver, ledger):
        """Only the poller writes the cache; repeat misses repeat the RPC call."""
        ledger.finalized = {777}

        await resolver.is_confirmed(777)
        await resolver.is_confirmed(777)

        assert not await resolver.cache.contains(777)
        assert ledger.range_calls == [(777, 777), (777, 777)]


class TestStatusMapping:
    """HTTP codes for each resolution."""

    @pytest.mark.parametrize(
        "status, code",
        [
            (ConfirmationStatus.CONFIRMED, 200),
            (ConfirmationStatus.NOT_CONFIRMED, 404),
            (ConfirmationStatus.UPSTREAM_ERROR, 500),
        ],
    )
    def test_http_status(self, status, code):
        """Each status maps to its HTTP code."""
        assert status.http_status == code


class TestLogging:
    """Resolver log output."""

    @pytest.mark.asyncio
    async def test_resolver_logs_are_prefixed(self, resolver, caplog):
        """Resolver log lines carry the [RESOLVER] tag."""
        caplog.set_level(logging.INFO, logger="finality_cache.services.resolver")

        await resolver.is_confirmed(42)

        messages = [r.getMessage() for r in caplog.records if r.name.endswith("resolver")]
        assert messages
        assert all(m.startswith("[RESOLVER]") for m in messages)
