from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from finality_cache import __version__
from finality_cache.dependencies import get_cache, get_poller
from finality_cache.services.cache import SlotCache
from finality_cache.services.poller import SlotPoller

router = APIRouter(tags=["Health"])


class HealthStatus(BaseModel):
    status: str
    poller_running: bool
    watermark: Optional[int] = None
    latest_frontier: Optional[int] = None
    cache_size: int
    cache_capacity: int


@router.get("/")
async def root(request: Request):
    """Service banner."""
    return {
        "service": request.app.title,
        "version": __version__,
        "status": "operational",
    }


@router.get("/health", response_model=HealthStatus)
async def health(
    request: Request,
    cache: SlotCache = Depends(get_cache),
    poller: SlotPoller = Depends(get_poller),
) -> HealthStatus:
    """
    Detailed health check.

    "degraded" means the poller is not running and every query falls
    back to the ledger RPC.
    """
    task = getattr(request.app.state, "poller_task", None)
    running = task is not None and not task.done()
    return HealthStatus(
        status="healthy" if running else "degraded",
        poller_running=running,
        watermark=poller.watermark,
        latest_frontier=poller.latest_frontier,
        cache_size=len(cache),
        cache_capacity=cache.capacity,
    )
