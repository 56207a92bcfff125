"""Readers of pagination windows.

``PageReader`` walks a single bound; ``ChainedPageReader`` walks a sequence of
bounds pulled from an upstream ``Reader[int]``, one fresh ``PageReader`` per
bound, so several differently sized resources page as one continuous stream.
"""

from __future__ import annotations

from ..core.context import StreamContext
from ..core.exceptions import PaginationError, StreamEnded
from ..core.stream import Reader
from ..models.page import Page
from .telemetry import log_chain_advanced


def _validate_limit(limit: int) -> None:
    if limit <= 0:
        raise PaginationError(f"limit must be positive, got {limit}")


class PageReader:
    """Pages from 0 to ``total`` in steps of ``limit``, then ends.

    The final window is truncated so no page reaches past ``total``.

    Example:
        >>> reader = PageReader(total=5, limit=3)
        >>> # Page(skip=0, limit=3, total=5), Page(skip=3, limit=2, total=5), StreamEnded

    Raises:
        PaginationError: If limit is not positive
    """

    def __init__(self, total: int, limit: int) -> None:
        _validate_limit(limit)
        self._total = total
        self._limit = limit
        self._skip = 0

    @property
    def total(self) -> int:
        return self._total

    @property
    def limit(self) -> int:
        return self._limit

    async def read(self, ctx: StreamContext | None = None) -> Page:
        if self._skip >= self._total:
            raise StreamEnded()

        page = Page(
            skip=self._skip,
            limit=min(self._limit, self._total - self._skip),
            total=self._total,
        )
        self._skip += self._limit
        return page


class ChainedPageReader:
    """Pages through every bound read from ``bounds``, one after another.

    Each bound restarts pagination at skip 0. Bounds that produce no pages
    (zero or negative) are skipped. The chain ends when ``bounds`` ends.

    Args:
        bounds: Reader of totals, one per logical resource. None means the
            chain is already exhausted.
        limit: Page limit applied to every bound
    """

    def __init__(self, bounds: Reader[int] | None, limit: int) -> None:
        _validate_limit(limit)
        self._bounds = bounds
        self._limit = limit
        self._pages: PageReader | None = None

    async def read(self, ctx: StreamContext | None = None) -> Page:
        if self._bounds is None:
            raise StreamEnded()

        if self._pages is not None:
            try:
                return await self._pages.read(ctx)
            except StreamEnded:
                self._pages = None

        skipped = 0
        while True:
            # StreamEnded from upstream ends the chain
            bound = await self._bounds.read(ctx)
            if bound > 0:
                break
            skipped += 1

        log_chain_advanced(bound=bound, limit=self._limit, skipped=skipped)
        self._pages = PageReader(total=bound, limit=self._limit)
        return await self._pages.read(ctx)
