"""Stats tees: emit one structured record per observed read or write."""

from __future__ import annotations

from ..models.stats import BatchedStats, StreamedStats
from .readers import BatchedTeeReader, StreamedTeeReader
from .recorder import StatsRecorder
from .writers import BatchedTeeWriter, StreamedTeeWriter

__all__ = [
    "StreamedStats",
    "BatchedStats",
    "StatsRecorder",
    "StreamedTeeReader",
    "BatchedTeeReader",
    "StreamedTeeWriter",
    "BatchedTeeWriter",
]
