import pytest

from finality_cache.core.errors import UpstreamError
from finality_cache.services.cache import SlotCache
from finality_cache.services.mocks import MockLedgerSource, MockMetrics


@pytest.fixture
def cache():
    return SlotCache(capacity=3)


@pytest.fixture
def ledger():
    return MockLedgerSource()


@pytest.fixture
def metrics():
    return MockMetrics()


@pytest.fixture
def rpc_timeout():
    return UpstreamError("getBlocks", "transport error: timeout")
