"""
Finality Cache

Answers "has slot N been finalized?" from a locally refreshed memory of
recently finalized slots, falling back to the ledger RPC on a miss.
"""

__version__ = "1.0.0"
