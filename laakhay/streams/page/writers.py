"""Writers that attach pagination windows to values.

Running out of pages is the only thing that closes these writers: once the
window sequence is exhausted every write raises ``SinkClosed``, even if the
wrapped writer would still accept values.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from ..core.context import StreamContext
from ..core.exceptions import SinkClosed, StreamEnded
from ..core.stream import Reader, Writer
from ..models.page import Page, Paged
from .readers import ChainedPageReader, PageReader
from .telemetry import log_pages_exhausted

T = TypeVar("T")


class _PagingWriter(Generic[T]):
    def __init__(self, writer: Writer[Paged[T]] | None, pages: Reader[Page]) -> None:
        self._writer = writer
        self._pages = pages
        self._exhausted = False

    def _on_exhausted(self) -> None:
        pass

    async def write(self, ctx: StreamContext | None, value: T) -> None:
        if self._writer is None or self._exhausted:
            raise SinkClosed()

        try:
            page = await self._pages.read(ctx)
        except StreamEnded:
            self._exhausted = True
            self._on_exhausted()
            raise SinkClosed("pagination exhausted") from None

        await self._writer.write(ctx, Paged(page=page, value=value))


class PagedWriter(_PagingWriter[T]):
    """Pairs each written value with the next page of ``total``/``limit``.

    Example:
        >>> writer = PagedWriter(sink, total=4, limit=2)
        >>> # 1st and 2nd writes reach ``sink``; the 3rd raises SinkClosed

    Args:
        writer: Receives ``Paged`` values. None means always closed.
        total: Total number of items to page through
        limit: Page limit
    """

    def __init__(self, writer: Writer[Paged[T]] | None, total: int, limit: int) -> None:
        super().__init__(writer, PageReader(total=total, limit=limit))
        self._total = total
        self._limit = limit

    def _on_exhausted(self) -> None:
        log_pages_exhausted(total=self._total, limit=self._limit)


class ChainedPagedWriter(_PagingWriter[T]):
    """Like ``PagedWriter`` but pages through every bound read from ``bounds``."""

    def __init__(
        self,
        writer: Writer[Paged[T]] | None,
        bounds: Reader[int] | None,
        limit: int,
    ) -> None:
        super().__init__(writer, ChainedPageReader(bounds=bounds, limit=limit))
