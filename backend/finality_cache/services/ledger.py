"""
Finality Cache - Ledger Source

The poller and the resolver both read the ledger through LedgerSource:
- get_frontier(): highest finalized slot right now (getSlot)
- get_range(start, end): finalized slots in [start, end] inclusive (getBlocks)

An empty range is a valid answer, not an error. Every failure is raised
as UpstreamError.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Annotated, Any, Optional

import httpx
from pydantic import BaseModel, Field, StrictInt, TypeAdapter, ValidationError

from finality_cache.core.errors import UpstreamError
from finality_cache.core.types import MAX_SLOT

logger = logging.getLogger(__name__)

_StrictSlot = Annotated[StrictInt, Field(ge=0, le=MAX_SLOT)]
_slot_adapter = TypeAdapter(_StrictSlot)
_slot_list_adapter = TypeAdapter(list[_StrictSlot])


# =============================================================================
# INTERFACE
# =============================================================================

class LedgerSource(ABC):
    """Read access to the ledger's finalized history."""

    @abstractmethod
    async def get_frontier(self) -> int:
        """Highest slot currently reported as finalized."""

    @abstractmethod
    async def get_range(self, start_slot: int, end_slot: int) -> list[int]:
        """Finalized slots in ``[start_slot, end_slot]``, ascending."""

    async def aclose(self) -> None:
        """Release transport resources, if any."""


# =============================================================================
# JSON-RPC WIRE MODELS
# =============================================================================

class RpcErrorObject(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class RpcResponse(BaseModel):
    jsonrpc: str = "2.0"
    id: Optional[int | str] = None
    result: Optional[Any] = None
    error: Optional[RpcErrorObject] = None


# =============================================================================
# SOLANA JSON-RPC CLIENT
# =============================================================================

class SolanaRpcClient(LedgerSource):
    """
    LedgerSource over Solana JSON-RPC 2.0.

    A single httpx.AsyncClient is shared by the poller and all in-flight
    queries; it is safe for concurrent use.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        commitment: str = "finalized",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.commitment = commitment
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self._request_ids = itertools.count(1)

    async def _call(self, method: str, params: list) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }

        try:
            response = await self.client.post(self.url, json=payload)
            response.raise_for_status()
            body = RpcResponse.model_validate(response.json())
        except httpx.HTTPError as e:
            raise UpstreamError(method, f"request failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise UpstreamError(method, f"malformed response: {e}") from e

        if body.error is not None:
            raise UpstreamError(
                method, f"RPC error {body.error.code}: {body.error.message}"
            )
        return body.result

    async def get_frontier(self) -> int:
        logger.debug("RPC CALL: getSlot")
        result = await self._call("getSlot", [{"commitment": self.commitment}])
        try:
            return _slot_adapter.validate_python(result)
        except ValidationError as e:
            raise UpstreamError("getSlot", f"unexpected result {result!r}") from e

    async def get_range(self, start_slot: int, end_slot: int) -> list[int]:
        logger.debug(f"RPC CALL: getBlocks ({start_slot}..={end_slot})")
        result = await self._call(
            "getBlocks", [start_slot, end_slot, {"commitment": self.commitment}]
        )
        try:
            return _slot_list_adapter.validate_python(result)
        except ValidationError as e:
            raise UpstreamError("getBlocks", f"unexpected result {result!r}") from e

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
