"""Fluent builder for decorated Reader/Writer pipelines.

Architecture:
    The builder records decorator layers in call order. On ``build()`` the
    read-side layers are applied around the source and the write-side layers
    around the sink, each new layer wrapping the previous one. The first layer
    added therefore sits closest to the source/sink and the last one closest
    to the pump:

        source -> [read layers, in call order] -> Pump
        Pump -> [write layers, in reverse call order] -> sink

    A missing source or sink is not an error: every decorator degrades to a
    terminal stage, and the resulting pump stops without doing anything.

Example:
    >>> pump = (PipelineBuilder()
    ...     .read_from(reader_from(1, 2, 3))
    ...     .paced(0.1)
    ...     .logged(msg="read")
    ...     .write_to(sink)
    ...     .write_tee_stats(stats, tag="sink")
    ...     .start())
    >>> await pump.context.done()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import timedelta
from typing import Any

from ..core.context import StreamContext
from ..core.stream import Reader, Writer
from ..log import StreamedLogReader, StreamedLogWriter
from ..models.stats import StreamedStats
from ..page import ChainedPagedWriter, PagedWriter
from ..runtime.pump import Pump
from ..sleep import DynamicDelayReader, StaticDelayReader, StaticDelayWriter
from ..stats import StreamedTeeReader, StreamedTeeWriter

ReadLayer = Callable[[Reader[Any] | None], Reader[Any]]
WriteLayer = Callable[[Writer[Any] | None], Writer[Any]]


class PipelineBuilder:
    """Stacks decorators around a source Reader and a sink Writer."""

    def __init__(self) -> None:
        self._reader: Reader[Any] | None = None
        self._writer: Writer[Any] | None = None
        self._read_layers: list[ReadLayer] = []
        self._write_layers: list[WriteLayer] = []

    # --- Read side ----------------------------------------------------------

    def read_from(self, reader: Reader[Any] | None) -> PipelineBuilder:
        """Set the source Reader.

        Returns:
            Self for method chaining
        """
        self._reader = reader
        return self

    def paced(self, delay: float | timedelta) -> PipelineBuilder:
        """Wait ``delay`` before every read."""
        self._read_layers.append(lambda r: StaticDelayReader(r, delay))
        return self

    def paced_dynamic(
        self,
        delay: float | timedelta,
        bounds: int | None = None,
    ) -> PipelineBuilder:
        """Make every read take ``delay`` (spread over ``bounds`` elements if set)."""
        self._read_layers.append(lambda r: DynamicDelayReader(r, delay, bounds))
        return self

    def tee_stats(
        self,
        stats: Writer[StreamedStats[Any]] | None,
        *,
        tag: str | None = None,
        fmt: Callable[[Any], Any] | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> PipelineBuilder:
        """Record one stats record per read into ``stats``."""
        self._read_layers.append(
            lambda r: StreamedTeeReader(r, stats, tag=tag, fmt=fmt, ctx_keys=ctx_keys)
        )
        return self

    def logged(
        self,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        *,
        msg: str | None = None,
        fmt: Callable[[Any], Any] | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> PipelineBuilder:
        """Log one line per read."""
        self._read_layers.append(
            lambda r: StreamedLogReader(r, logger, msg=msg, fmt=fmt, ctx_keys=ctx_keys)
        )
        return self

    # --- Write side ---------------------------------------------------------

    def write_to(self, writer: Writer[Any] | None) -> PipelineBuilder:
        """Set the sink Writer.

        Returns:
            Self for method chaining
        """
        self._writer = writer
        return self

    def paginated(
        self,
        limit: int,
        *,
        total: int | None = None,
        bounds: Reader[int] | None = None,
    ) -> PipelineBuilder:
        """Pair written values with pages; the sink receives ``Paged`` values.

        Exactly one of ``total`` and ``bounds`` must be given.

        Raises:
            ValueError: If both or neither of ``total`` and ``bounds`` are given
        """
        if (total is None) == (bounds is None):
            raise ValueError("exactly one of total or bounds is required")

        if total is not None:
            self._write_layers.append(lambda w: PagedWriter(w, total=total, limit=limit))
        else:
            self._write_layers.append(lambda w: ChainedPagedWriter(w, bounds=bounds, limit=limit))
        return self

    def write_paced(self, delay: float | timedelta) -> PipelineBuilder:
        """Wait ``delay`` after every write."""
        self._write_layers.append(lambda w: StaticDelayWriter(w, delay))
        return self

    def write_tee_stats(
        self,
        stats: Writer[StreamedStats[Any]] | None,
        *,
        tag: str | None = None,
        fmt: Callable[[Any], Any] | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> PipelineBuilder:
        """Record one stats record per write into ``stats``."""
        self._write_layers.append(
            lambda w: StreamedTeeWriter(w, stats, tag=tag, fmt=fmt, ctx_keys=ctx_keys)
        )
        return self

    def write_logged(
        self,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        *,
        msg: str | None = None,
        fmt: Callable[[Any], Any] | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> PipelineBuilder:
        """Log one line per write."""
        self._write_layers.append(
            lambda w: StreamedLogWriter(w, logger, msg=msg, fmt=fmt, ctx_keys=ctx_keys)
        )
        return self

    # --- Output -------------------------------------------------------------

    def build(self) -> tuple[Reader[Any] | None, Writer[Any] | None]:
        """Apply all layers.

        Returns:
            The decorated (reader, writer) pair. A side with neither a
            source/sink nor layers stays None.
        """
        reader = self._reader
        for read_layer in self._read_layers:
            reader = read_layer(reader)

        writer = self._writer
        for write_layer in self._write_layers:
            writer = write_layer(writer)

        return reader, writer

    def start(self, ctx: StreamContext | None = None) -> Pump[Any]:
        """Build the pipeline and start a Pump over it.

        A missing source or sink stops the pump before its first read, even
        when layers were stacked on that side. Must be called from a running
        event loop.
        """
        reader, writer = self.build()
        if self._reader is None:
            reader = None
        if self._writer is None:
            writer = None
        return Pump(reader, writer, ctx).start()
