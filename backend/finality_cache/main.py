"""
Finality Cache - FastAPI Application.

Composition root: one SlotCache shared by reference between the poller
(writer) and the resolver (reader). The poller runs as a background task
for the lifetime of the app and is cancelled on shutdown.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from finality_cache import __version__
from finality_cache.api import health, slots
from finality_cache.core.config import Settings, get_settings
from finality_cache.core.logging import configure_logging
from finality_cache.services.cache import SlotCache
from finality_cache.services.ledger import LedgerSource, SolanaRpcClient
from finality_cache.services.metrics import LoggingMetrics, Metrics
from finality_cache.services.poller import SlotPoller
from finality_cache.services.resolver import ConfirmationResolver

logger = logging.getLogger(__name__)


def _report_poller_exit(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(
            f"[POLLER] Poller task died: {exc!r}. Queries will use RPC fallback only.",
            exc_info=exc,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    poller: SlotPoller = app.state.poller
    task = asyncio.create_task(poller.run(), name="slot-poller")
    task.add_done_callback(_report_poller_exit)
    app.state.poller_task = task
    try:
        yield
    finally:
        try:
            task.cancel()
            await asyncio.wait([task])
        finally:
            if app.state.owns_ledger:
                await app.state.ledger.aclose()


def create_app(
    settings: Optional[Settings] = None,
    ledger: Optional[LedgerSource] = None,
    metrics: Optional[Metrics] = None,
) -> FastAPI:
    """
    Build the application.

    ``ledger`` and ``metrics`` default to the Solana JSON-RPC client and the
    logging sink; pass doubles to run without network access.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Finality Cache - cached slot confirmation over ledger RPC",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.owns_ledger = ledger is None
    app.state.ledger = ledger or SolanaRpcClient(
        settings.rpc_endpoint,
        timeout=settings.RPC_TIMEOUT_SECONDS,
        commitment=settings.RPC_COMMITMENT,
    )
    app.state.metrics = metrics or LoggingMetrics()
    app.state.cache = SlotCache(settings.CACHE_CAPACITY)
    app.state.poller = SlotPoller(
        app.state.cache,
        app.state.ledger,
        app.state.metrics,
        interval=settings.POLL_INTERVAL_SECONDS,
        lookback=settings.INITIAL_LOOKBACK,
        startup_backoff=settings.STARTUP_BACKOFF_SECONDS,
        retry_startup=settings.STARTUP_RETRY_FOREVER,
    )
    app.state.resolver = ConfirmationResolver(
        app.state.cache, app.state.ledger, app.state.metrics
    )
    app.state.poller_task = None

    app.include_router(health.router)
    app.include_router(slots.router)

    return app


def run() -> None:
    """Console entry point."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Listening on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
