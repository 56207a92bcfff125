"""Reader/Writer contract and function adapters.

A Reader produces the next value or raises ``StreamEnded``; a Writer accepts a
value or raises ``SinkClosed``. Both take a ``StreamContext`` (or None, which
means a fresh background context).

The ``*Func`` adapters let plain async callables implement the contract. An
adapter without an implementation behaves as already terminal, which is what
every decorator falls back to when its delegate is missing.
"""

from __future__ import annotations

from collections import deque
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

from .context import StreamContext, ensure_context
from .exceptions import SinkClosed, StreamEnded

T = TypeVar("T")
U = TypeVar("U")
T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)

ReadFn = Callable[[StreamContext | None], Awaitable[T]]
WriteFn = Callable[[StreamContext | None, T], Awaitable[None]]
CloseFn = Callable[[], Awaitable[None]]


@runtime_checkable
class Reader(Protocol[T_co]):
    """Produces values one at a time.

    Raises:
        StreamEnded: No more values, now or ever
    """

    async def read(self, ctx: StreamContext | None) -> T_co: ...


@runtime_checkable
class Writer(Protocol[T_contra]):
    """Consumes values one at a time.

    Raises:
        SinkClosed: No further writes are accepted
    """

    async def write(self, ctx: StreamContext | None, value: T_contra) -> None: ...


@runtime_checkable
class ReadWriter(Reader[T_co], Writer[T_contra], Protocol[T_co, T_contra]):
    """Groups a Reader and a Writer."""


@runtime_checkable
class ReadCloser(Reader[T_co], Protocol[T_co]):
    """Reader with an explicit close."""

    async def close(self) -> None: ...


@runtime_checkable
class WriteCloser(Writer[T_contra], Protocol[T_contra]):
    """Writer with an explicit close."""

    async def close(self) -> None: ...


# -----------------------------------------------------------------------------
# Function adapters.
# -----------------------------------------------------------------------------


@dataclass
class ReaderFunc(Generic[T]):
    """Reader backed by an async callable; unset ``impl`` means ended.

    Example:
        >>> async def impl(ctx):
        ...     return 1
        >>> reader = ReaderFunc(impl)
    """

    impl: ReadFn[T] | None = None

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self.impl is None:
            raise StreamEnded()
        return await self.impl(ctx)


@dataclass
class WriterFunc(Generic[T]):
    """Writer backed by an async callable; unset ``impl`` means closed."""

    impl: WriteFn[T] | None = None

    async def write(self, ctx: StreamContext | None, value: T) -> None:
        if self.impl is None:
            raise SinkClosed()
        await self.impl(ctx, value)


@dataclass
class ReadWriterFunc(Generic[T, U]):
    """ReadWriter backed by two async callables."""

    impl_read: ReadFn[T] | None = None
    impl_write: WriteFn[U] | None = None

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self.impl_read is None:
            raise StreamEnded()
        return await self.impl_read(ctx)

    async def write(self, ctx: StreamContext | None, value: U) -> None:
        if self.impl_write is None:
            raise SinkClosed()
        await self.impl_write(ctx, value)


@dataclass
class ReadCloserFunc(Generic[T]):
    """ReadCloser backed by async callables; unset close is a no-op."""

    impl_read: ReadFn[T] | None = None
    impl_close: CloseFn | None = None

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self.impl_read is None:
            raise StreamEnded()
        return await self.impl_read(ctx)

    async def close(self) -> None:
        if self.impl_close is not None:
            await self.impl_close()


@dataclass
class WriteCloserFunc(Generic[T]):
    """WriteCloser backed by async callables; unset close is a no-op."""

    impl_write: WriteFn[T] | None = None
    impl_close: CloseFn | None = None

    async def write(self, ctx: StreamContext | None, value: T) -> None:
        if self.impl_write is None:
            raise SinkClosed()
        await self.impl_write(ctx, value)

    async def close(self) -> None:
        if self.impl_close is not None:
            await self.impl_close()


# -----------------------------------------------------------------------------
# Constructors.
# -----------------------------------------------------------------------------


class _SequenceReader(Generic[T]):
    def __init__(self, values: tuple[T, ...]) -> None:
        self._values = values
        self._index = 0

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self._index >= len(self._values):
            raise StreamEnded()
        value = self._values[self._index]
        self._index += 1
        return value


class _BufferReadWriter(Generic[T]):
    def __init__(self, values: tuple[T, ...]) -> None:
        self._buffer: deque[T] = deque(values)
        self._ended = False

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self._ended or not self._buffer:
            self._ended = True
            raise StreamEnded()
        return self._buffer.popleft()

    async def write(self, ctx: StreamContext | None, value: T) -> None:
        if self._ended:
            raise SinkClosed("buffer already drained to its end")
        self._buffer.append(value)

    def __len__(self) -> int:
        return len(self._buffer)


def reader_from(*values: T) -> Reader[T]:
    """Return a Reader yielding ``values`` in order, then ``StreamEnded``."""
    return _SequenceReader(values)


def read_writer_from(*values: T) -> _BufferReadWriter[T]:
    """Return an in-memory FIFO seeded with ``values``.

    Reads pop from the front; writes append to the back. The first read that
    finds the buffer empty ends the stream for good: later reads keep raising
    ``StreamEnded`` and later writes raise ``SinkClosed``. Handy as a
    collecting stats sink when drained with ``len()`` checks.
    """
    return _BufferReadWriter(values)


def ended_reader() -> Reader[T]:
    """Return a Reader that is already at its end."""
    return ReaderFunc()


def closed_writer() -> Writer[T]:
    """Return a Writer that is already closed."""
    return WriterFunc()


async def aiter_reader(
    reader: Reader[T], ctx: StreamContext | None = None
) -> AsyncIterator[T]:
    """Iterate over ``reader`` until it ends.

    Operational errors propagate to the consumer of the iterator.
    """
    ctx = ensure_context(ctx)
    while True:
        try:
            value = await reader.read(ctx)
        except StreamEnded:
            return
        yield value


async def read_all(reader: Reader[T], ctx: StreamContext | None = None) -> list[T]:
    """Collect every value from ``reader`` into a list."""
    return [value async for value in aiter_reader(reader, ctx)]
