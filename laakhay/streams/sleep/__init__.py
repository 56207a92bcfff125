"""Pacing decorators: fixed and self-adjusting delays between operations."""

from __future__ import annotations

from .readers import DynamicDelayReader, StaticDelayReader
from .timer import sleep_or_cancelled, to_seconds
from .writers import StaticDelayWriter

__all__ = [
    "StaticDelayReader",
    "DynamicDelayReader",
    "StaticDelayWriter",
    "sleep_or_cancelled",
    "to_seconds",
]
