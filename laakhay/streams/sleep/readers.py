"""Readers that pace their delegate."""

from __future__ import annotations

from datetime import timedelta
from time import perf_counter
from typing import Generic, TypeVar

from ..core.context import StreamContext
from ..core.exceptions import StreamEnded
from ..core.stream import Reader
from .timer import sleep_or_cancelled, to_seconds

T = TypeVar("T")


class StaticDelayReader(Generic[T]):
    """Waits ``delay`` before every read.

    The wait ends early when the context is cancelled, and the read still
    happens afterwards with that same context.

    Args:
        reader: Reader to delay. None means already ended.
        delay: Seconds (or timedelta) to wait; non-positive means no wait
    """

    def __init__(
        self,
        reader: Reader[T] | None,
        delay: float | timedelta | None = None,
    ) -> None:
        self._reader = reader
        self._delay = to_seconds(delay)

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self._reader is None:
            raise StreamEnded()

        await sleep_or_cancelled(ctx, self._delay)
        return await self._reader.read(ctx)


class DynamicDelayReader(Generic[T]):
    """Tops up each read so it takes ``delay`` in total.

    The time spent inside the wrapped read is measured and only the remainder
    is slept. With ``bounds`` set to the expected number of elements, ``delay``
    is spread over all of them, so the whole stream takes roughly ``delay``.
    Errors from the wrapped reader are raised without sleeping.

    Args:
        reader: Reader to pace. None means already ended.
        delay: Target duration per read (or per stream, with bounds)
        bounds: Expected element count; non-positive or None disables it
    """

    def __init__(
        self,
        reader: Reader[T] | None,
        delay: float | timedelta | None = None,
        bounds: int | None = None,
    ) -> None:
        self._reader = reader
        self._delay = to_seconds(delay)
        self._bounds = bounds if bounds and bounds > 0 else None

    @property
    def target(self) -> float:
        """Seconds each read should take."""
        if self._bounds is None:
            return self._delay
        return self._delay / self._bounds

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self._reader is None:
            raise StreamEnded()

        start = perf_counter()
        value = await self._reader.read(ctx)
        elapsed = perf_counter() - start

        await sleep_or_cancelled(ctx, self.target - elapsed)
        return value
