"""Finality Cache - API routers."""

from . import health, slots

__all__ = ["health", "slots"]
