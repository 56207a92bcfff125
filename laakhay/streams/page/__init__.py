"""Pagination sequences and paginated writers.

Architecture:
    - readers.py: single-bound and chained page readers
    - writers.py: writers pairing values with pages
    - telemetry.py: structured logging
"""

from __future__ import annotations

from ..models.page import Page, Paged
from .readers import ChainedPageReader, PageReader
from .writers import ChainedPagedWriter, PagedWriter

__all__ = [
    "Page",
    "Paged",
    "PageReader",
    "ChainedPageReader",
    "PagedWriter",
    "ChainedPagedWriter",
]
