"""
Finality Cache - Services

- SlotCache: bounded FIFO membership cache of finalized slots
- SlotPoller: background synchronizer advancing the watermark
- ConfirmationResolver: read-through query policy (cache, then RPC)
"""

from .cache import SlotCache
from .ledger import LedgerSource, SolanaRpcClient
from .metrics import LoggingMetrics, Metrics
from .poller import SlotPoller
from .resolver import ConfirmationResolver

__all__ = [
    "SlotCache",
    "LedgerSource",
    "SolanaRpcClient",
    "Metrics",
    "LoggingMetrics",
    "SlotPoller",
    "ConfirmationResolver",
]
