"""Finality Cache - core settings, types and errors."""
