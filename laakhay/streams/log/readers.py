"""Readers that log every read.

``StreamEnded`` is not logged: the stream simply has nothing more to report.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic, TypeVar

from ..core.context import StreamContext
from ..core.exceptions import StreamEnded
from ..core.stream import Reader
from .emit import LineEmitter

T = TypeVar("T")


class StreamedLogReader(Generic[T]):
    """Wraps ``reader``, logging one line per read.

    Args:
        reader: Reader to observe. None means already ended.
        logger: Logger to write to (default: module logger)
        msg: Log message (default: "<unset>")
        fmt: Projection of the value logged under "val" (default: the value)
        ctx_keys: Context keys logged under "ctx"
    """

    def __init__(
        self,
        reader: Reader[T] | None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        *,
        msg: str | None = None,
        fmt: Callable[[T], Any] | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._reader = reader
        self._fmt = fmt
        self._emitter = LineEmitter(logger, msg, ctx_keys)

    async def read(self, ctx: StreamContext | None = None) -> T:
        if self._reader is None:
            raise StreamEnded()

        try:
            value = await self._reader.read(ctx)
        except StreamEnded:
            raise
        except Exception as e:
            self._emitter.emit(ctx, error=e, field="val", value=None)
            raise

        logged = self._fmt(value) if self._fmt else value
        self._emitter.emit(ctx, error=None, field="val", value=logged)
        return value


class BatchedLogReader(Generic[T]):
    """Wraps a batch reader, logging each batch's length under "len"."""

    def __init__(
        self,
        reader: Reader[Sequence[T]] | None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        *,
        msg: str | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._reader = reader
        self._emitter = LineEmitter(logger, msg, ctx_keys)

    async def read(self, ctx: StreamContext | None = None) -> Sequence[T]:
        if self._reader is None:
            raise StreamEnded()

        try:
            batch = await self._reader.read(ctx)
        except StreamEnded:
            raise
        except Exception as e:
            self._emitter.emit(ctx, error=e, field="len", value=0)
            raise

        self._emitter.emit(ctx, error=None, field="len", value=len(batch))
        return batch
