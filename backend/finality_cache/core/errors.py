"""
Finality Cache - Errors

There is a single error kind in the core: the ledger RPC failed. Transport
failures, non-2xx responses, JSON-RPC error objects and malformed results
all surface as UpstreamError.
"""


class UpstreamError(Exception):
    """The ledger source could not answer a request."""

    def __init__(self, method: str, message: str):
        self.method = method
        self.message = message
        super().__init__(f"{method}: {message}")
