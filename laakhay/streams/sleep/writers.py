"""Writers that pace their delegate."""

from __future__ import annotations

from datetime import timedelta
from typing import Generic, TypeVar

from ..core.context import StreamContext
from ..core.exceptions import SinkClosed
from ..core.stream import Writer
from .timer import sleep_or_cancelled, to_seconds

T = TypeVar("T")


class StaticDelayWriter(Generic[T]):
    """Waits ``delay`` after every write.

    The write happens first; its outcome (including any error) is reported
    once the wait is over or the context is cancelled. ``SinkClosed`` is
    raised at once, without waiting.

    Args:
        writer: Writer to delay. None means already closed.
        delay: Seconds (or timedelta) to wait; non-positive means no wait
    """

    def __init__(
        self,
        writer: Writer[T] | None,
        delay: float | timedelta | None = None,
    ) -> None:
        self._writer = writer
        self._delay = to_seconds(delay)

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

        await sleep_or_cancelled(ctx, self._delay)
        if error is not None:
            raise error
