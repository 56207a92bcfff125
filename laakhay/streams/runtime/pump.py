"""Pump that drives values from a Reader into a Writer.

Architecture:
    A Pump owns one background asyncio task and a child StreamContext derived
    from the caller's context. The task alternates one read and one write
    until the reader or writer raises (terminal sentinel or operational error)
    or the context is cancelled. However the loop ends, the child context is
    cancelled exactly once, so ``await pump.context.done()`` is the completion
    signal both for natural termination and for ``pump.cancel()``.

    The pump does not interpret why it stopped and never retries. Decorators
    stacked on the reader and writer (see ``stats`` and ``log``) are where
    errors get observed.

See Also:
    - PipelineBuilder: stacks decorators and starts a Pump
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from ..core.context import StreamContext, ensure_context
from ..core.stream import Reader, Writer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PumpState(str, Enum):
    """Lifecycle state of a Pump."""

    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class PumpMetrics:
    """Counters for a single pump run."""

    reads: int = 0
    writes: int = 0
    started_at: datetime | None = None
    stopped_at: datetime | None = None


class Pump(Generic[T]):
    """Transfers values from ``reader`` to ``writer`` in a background task.

    Example:
        >>> pump = Pump(reader_from(1, 2, 3), writer).start()
        >>> await pump.context.done()

    Args:
        reader: Source of values. None stops the pump immediately.
        writer: Destination of values. None stops the pump immediately.
        ctx: Parent context; cancelling it cancels the pump as well
    """

    def __init__(
        self,
        reader: Reader[T] | None,
        writer: Writer[T] | None,
        ctx: StreamContext | None = None,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._ctx = ensure_context(ctx).child()
        self._state = PumpState.STOPPED
        self._started = False
        self._task: asyncio.Task[None] | None = None
        self._metrics = PumpMetrics()

    @property
    def context(self) -> StreamContext:
        """Context handed to the reader and writer; cancelled when the pump stops."""
        return self._ctx

    @property
    def state(self) -> PumpState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is PumpState.RUNNING

    def get_metrics(self) -> PumpMetrics:
        """Get current pump metrics."""
        return self._metrics

    def start(self) -> Pump[T]:
        """Spawn the background task. Must be called from a running event loop.

        Raises:
            RuntimeError: If the pump was already started
        """
        if self._started:
            raise RuntimeError("Pump already started")
        self._started = True
        self._metrics.started_at = datetime.now(UTC)

        if self._reader is None or self._writer is None:
            self._finish()
            return self

        self._state = PumpState.RUNNING
        self._task = asyncio.create_task(self._run())
        logger.debug("pump_started")
        return self

    def cancel(self) -> None:
        """Request the pump to stop. Idempotent.

        An in-flight read or write is not interrupted; the loop stops at its
        next cancellation check.
        """
        self._ctx.cancel()

    async def join(self) -> None:
        """Wait for the background task to finish."""
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def stop(self) -> None:
        """Cancel the pump and wait for it to finish."""
        self.cancel()
        await self.join()

    async def _run(self) -> None:
        reader = self._reader
        writer = self._writer
        assert reader is not None and writer is not None

        ctx = self._ctx
        error: Exception | None = None
        try:
            while True:
                await asyncio.sleep(0)
                if ctx.cancelled:
                    break

                try:
                    value = await reader.read(ctx)
                except Exception as e:
                    error = e
                    break
                self._metrics.reads += 1

                try:
                    await writer.write(ctx, value)
                except Exception as e:
                    error = e
                    break
                self._metrics.writes += 1
        finally:
            self._finish(error)

    def _finish(self, error: Exception | None = None) -> None:
        self._state = PumpState.STOPPED
        self._metrics.stopped_at = datetime.now(UTC)
        self._ctx.cancel()
        logger.debug(
            "pump_stopped",
            extra={
                "reads": self._metrics.reads,
                "writes": self._metrics.writes,
                "error_type": type(error).__name__ if error is not None else None,
            },
        )

    async def __aenter__(self) -> Pump[T]:
        """Async context manager entry; starts the pump if needed."""
        if not self._started:
            self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.stop()


def start_pump(
    reader: Reader[T] | None,
    writer: Writer[T] | None,
    ctx: StreamContext | None = None,
) -> Pump[T]:
    """Create and start a Pump.

    Returns:
        The running (or, with a missing reader or writer, already stopped) pump
    """
    return Pump(reader, writer, ctx).start()
