"""Structured logging for pagination sequences."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_chain_advanced(*, bound: int, limit: int, skipped: int) -> None:
    """Log a chained page reader moving on to the next bound.

    Args:
        bound: New total pulled from the upstream bounds reader
        limit: Page limit applied to the new bound
        skipped: Number of empty bounds skipped before this one
    """
    logger.debug(
        "page_chain_advanced",
        extra={
            "bound": bound,
            "limit": limit,
            "skipped_bounds": skipped,
        },
    )


def log_pages_exhausted(*, total: int, limit: int) -> None:
    """Log a paginated writer closing because its pages ran out."""
    logger.debug(
        "page_writer_exhausted",
        extra={
            "total": total,
            "limit": limit,
        },
    )
