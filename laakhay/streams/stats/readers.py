"""Read-side stats tees.

The returned errors should be inspected by type: they may come from the
wrapped reader, from the stats writer (``ObservabilityError``, whose ``value``
is still a valid read), or from both (``StreamErrorGroup``).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Generic, TypeVar

from ..core.context import StreamContext
from ..core.exceptions import StreamEnded
from ..core.stream import Reader, Writer
from ..models.stats import BatchedStats, StreamedStats
from .recorder import StatsRecorder

T = TypeVar("T")
U = TypeVar("U")


class StreamedTeeReader(Generic[T, U]):
    """Reads from ``reader`` while writing one ``StreamedStats`` per read.

    Args:
        reader: Source of values. None means already ended.
        writer: Stats side channel. None passes values through untouched.
        tag: Record tag (default: "<unset>")
        fmt: Projection of the read value into ``StreamedStats.value``.
            None records no value.
        ctx_keys: Context keys to snapshot into each record
    """

    def __init__(
        self,
        reader: Reader[T] | None,
        writer: Writer[StreamedStats[U]] | None = None,
        *,
        tag: str | None = None,
        fmt: Callable[[T], U] | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._reader = reader
        self._fmt = fmt
        self._recorder: StatsRecorder[StreamedStats[U]] = StatsRecorder(writer, tag, ctx_keys)

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self._reader is None:
            raise StreamEnded()

        value: T | None = None
        error: Exception | None = None
        try:
            value = await self._reader.read(ctx)
        except StreamEnded:
            raise
        except Exception as e:
            error = e

        if self._recorder.enabled:
            stamp, delta = self._recorder.stamp()
            record = StreamedStats(
                tag=self._recorder.tag,
                value=self._fmt(value) if self._fmt and error is None else None,
                error=error,
                context=self._recorder.snapshot(ctx),
                stamp=stamp,
                delta=delta,
            )
            error = await self._recorder.emit(ctx, record, error=error, value=value)

        if error is not None:
            raise error
        return value  # type: ignore[return-value]


class BatchedTeeReader(Generic[T]):
    """Reads batches from ``reader`` while writing one ``BatchedStats`` per read.

    Same as ``StreamedTeeReader`` but records the batch length instead of a
    formatted value.
    """

    def __init__(
        self,
        reader: Reader[Sequence[T]] | None,
        writer: Writer[BatchedStats] | None = None,
        *,
        tag: str | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._reader = reader
        self._recorder: StatsRecorder[BatchedStats] = StatsRecorder(writer, tag, ctx_keys)

    async def read(self, ctx: StreamContext | None = None) -> Sequence[T]:
        if self._reader is None:
            raise StreamEnded()

        batch: Sequence[T] | None = None
        error: Exception | None = None
        try:
            batch = await self._reader.read(ctx)
        except StreamEnded:
            raise
        except Exception as e:
            error = e

        if self._recorder.enabled:
            stamp, delta = self._recorder.stamp()
            record = BatchedStats(
                tag=self._recorder.tag,
                length=len(batch) if batch is not None else 0,
                error=error,
                context=self._recorder.snapshot(ctx),
                stamp=stamp,
                delta=delta,
            )
            error = await self._recorder.emit(ctx, record, error=error, value=batch)

        if error is not None:
            raise error
        return batch  # type: ignore[return-value]
