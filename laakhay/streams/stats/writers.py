"""Write-side stats tees.

Errors raised here may come from the wrapped writer, from the stats writer
(``ObservabilityError``; the value was written successfully) or from both
(``StreamErrorGroup``).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Generic, TypeVar

from ..core.context import StreamContext
from ..core.exceptions import SinkClosed
from ..core.stream import Writer
from ..models.stats import BatchedStats, StreamedStats
from .recorder import StatsRecorder

T = TypeVar("T")
U = TypeVar("U")


class StreamedTeeWriter(Generic[T, U]):
    """Writes into ``writer`` while writing one ``StreamedStats`` per write.

    Args:
        writer: Destination of values. None means already closed.
        stats: Stats side channel. None passes values through untouched.
        tag: Record tag (default: "<unset>")
        fmt: Projection of the written value into ``StreamedStats.value``
        ctx_keys: Context keys to snapshot into each record
    """

    def __init__(
        self,
        writer: Writer[T] | None,
        stats: Writer[StreamedStats[U]] | None = None,
        *,
        tag: str | None = None,
        fmt: Callable[[T], U] | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._writer = writer
        self._fmt = fmt
        self._recorder: StatsRecorder[StreamedStats[U]] = StatsRecorder(stats, tag, ctx_keys)

    async def write(self, ctx: StreamContext | None, value: T) -> None:
        if self._writer is None:
            raise SinkClosed()

        error: Exception | None = None
        try:
            await self._writer.write(ctx, value)
        except SinkClosed:
            raise
        except Exception as e:
            error = e

        if self._recorder.enabled:
            stamp, delta = self._recorder.stamp()
            record = StreamedStats(
                tag=self._recorder.tag,
                value=self._fmt(value) if self._fmt else None,
                error=error,
                context=self._recorder.snapshot(ctx),
                stamp=stamp,
                delta=delta,
            )
            error = await self._recorder.emit(ctx, record, error=error, value=value)

        if error is not None:
            raise error


class BatchedTeeWriter(Generic[T]):
    """Writes batches into ``writer`` while recording their length."""

    def __init__(
        self,
        writer: Writer[Sequence[T]] | None,
        stats: Writer[BatchedStats] | None = None,
        *,
        tag: str | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._writer = writer
        self._recorder: StatsRecorder[BatchedStats] = StatsRecorder(stats, tag, ctx_keys)

    async def write(self, ctx: StreamContext | None, batch: Sequence[T]) -> None:
        if self._writer is None:
            raise SinkClosed()

        error: Exception | None = None
        try:
            await self._writer.write(ctx, batch)
        except SinkClosed:
            raise
        except Exception as e:
            error = e

        if self._recorder.enabled:
            stamp, delta = self._recorder.stamp()
            record = BatchedStats(
                tag=self._recorder.tag,
                length=len(batch),
                error=error,
                context=self._recorder.snapshot(ctx),
                stamp=stamp,
                delta=delta,
            )
            error = await self._recorder.emit(ctx, record, error=error, value=batch)

        if error is not None:
            raise error
