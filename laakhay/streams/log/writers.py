"""Writers that log every write.

``SinkClosed`` is logged at INFO level and then raised as is.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic, TypeVar

from ..core.context import StreamContext
from ..core.exceptions import SinkClosed
from ..core.stream import Writer
from .emit import LineEmitter

T = TypeVar("T")


class StreamedLogWriter(Generic[T]):
    """Wraps ``writer``, logging one line per write.

    Args:
        writer: Writer to observe. None means already closed.
        logger: Logger to write to (default: module logger)
        msg: Log message (default: "<unset>")
        fmt: Projection of the value logged under "val" (default: the value)
        ctx_keys: Context keys logged under "ctx"
    """

    def __init__(
        self,
        writer: Writer[T] | None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        *,
        msg: str | None = None,
        fmt: Callable[[T], Any] | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._writer = writer
        self._fmt = fmt
        self._emitter = LineEmitter(logger, msg, ctx_keys)

    async def write(self, ctx: StreamContext | None, value: T) -> None:
        if self._writer is None:
            raise SinkClosed()

        logged = self._fmt(value) if self._fmt else value
        try:
            await self._writer.write(ctx, value)
        except Exception as e:
            self._emitter.emit(ctx, error=e, field="val", value=logged)
            raise

        self._emitter.emit(ctx, error=None, field="val", value=logged)


class BatchedLogWriter(Generic[T]):
    """Wraps a batch writer, logging each batch's length under "len"."""

    def __init__(
        self,
        writer: Writer[Sequence[T]] | None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        *,
        msg: str | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._writer = writer
        self._emitter = LineEmitter(logger, msg, ctx_keys)

    async def write(self, ctx: StreamContext | None, batch: Sequence[T]) -> None:
        if self._writer is None:
            raise SinkClosed()

        try:
            await self._writer.write(ctx, batch)
        except Exception as e:
            self._emitter.emit(ctx, error=e, field="len", value=len(batch))
            raise

        self._emitter.emit(ctx, error=None, field="len", value=len(batch))
