"""Dependency injection helpers for FastAPI."""

from fastapi import Request

from finality_cache.services.cache import SlotCache
from finality_cache.services.poller import SlotPoller
from finality_cache.services.resolver import ConfirmationResolver


def get_resolver(request: Request) -> ConfirmationResolver:
    return request.app.state.resolver


def get_cache(request: Request) -> SlotCache:
    return request.app.state.cache


def get_poller(request: Request) -> SlotPoller:
    return request.app.state.poller
