"""Sink implementations."""

from .in_memory import InMemorySink

__all__ = ["InMemorySink"]
