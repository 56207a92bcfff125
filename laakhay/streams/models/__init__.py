"""Data models."""

from .page import Page, Paged
from .stats import BatchedStats, StreamedStats

__all__ = [
    "Page",
    "Paged",
    "StreamedStats",
    "BatchedStats",
]
