"""In-memory channel usable as both a Writer and a Reader.

Values written by one task can be read by another. Reads wait for a value;
once the sink is closed, remaining values are still delivered and then reads
raise ``StreamEnded``. Writes after close raise ``SinkClosed``.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Generic, TypeVar

from ..core.context import StreamContext, ensure_context
from ..core.exceptions import ContextCancelled, SinkClosed, StreamEnded

T = TypeVar("T")


class InMemorySink(Generic[T]):
    """Queue-backed Writer/Reader pair.

    Args:
        maxsize: Queue capacity; 0 means unbounded. Writes wait while full.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=maxsize)
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    async def write(self, ctx: StreamContext | None, value: T) -> None:
        if self.closed:
            raise SinkClosed("in-memory sink is closed")
        await self._queue.put(value)

    async def read(self, ctx: StreamContext | None = None) -> T:
        """Return the next value, waiting for one if necessary.

        Raises:
            StreamEnded: Sink is closed and drained
            ContextCancelled: ``ctx`` was cancelled while waiting
        """
        ctx = ensure_context(ctx)
        while True:
            if not self._queue.empty():
                return self._queue.get_nowait()
            if self.closed:
                raise StreamEnded()
            if ctx.cancelled:
                raise ContextCancelled()

            getter = asyncio.ensure_future(self._queue.get())
            waiters = {
                getter,
                asyncio.ensure_future(self._closed.wait()),
                asyncio.ensure_future(ctx.done()),
            }
            try:
                done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
            finally:
                for task in waiters:
                    if not task.done():
                        task.cancel()
            if getter in done:
                return getter.result()

    async def get(self, timeout: float | None = None) -> T:
        """Get the next value, optionally giving up after ``timeout`` seconds.

        Raises:
            TimeoutError: No value arrived in time
        """
        if timeout is None:
            return await self._queue.get()
        return await asyncio.wait_for(self._queue.get(), timeout=timeout)

    def get_nowait(self) -> T:
        return self._queue.get_nowait()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()

    async def stream(self, ctx: StreamContext | None = None) -> AsyncIterator[T]:
        """Yield values until the sink is closed and drained."""
        while True:
            try:
                yield await self.read(ctx)
            except StreamEnded:
                return

    async def close(self) -> None:
        """Close the sink. Idempotent."""
        self._closed.set()
