"""
Finality Cache - Mock Collaborators

In-process stand-ins for the ledger RPC and the metrics sink. Used by the
test suite and for running the service without network access.
"""

from .ledger import MockLedgerSource
from .metrics import MockMetrics

__all__ = ["MockLedgerSource", "MockMetrics"]
