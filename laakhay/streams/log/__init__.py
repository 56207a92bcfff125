"""Logging decorators: one structured log line per read or write."""

from __future__ import annotations

from .emit import LineEmitter
from .readers import BatchedLogReader, StreamedLogReader
from .writers import BatchedLogWriter, StreamedLogWriter

__all__ = [
    "LineEmitter",
    "StreamedLogReader",
    "BatchedLogReader",
    "StreamedLogWriter",
    "BatchedLogWriter",
]
