"""Record bookkeeping shared by the stats tees.

Architecture:
    Each tee owns one StatsRecorder. The recorder keeps the tag, the context
    keys to snapshot and the timestamp of the previous record, and it writes
    finished records to the side channel. Side-channel failures are wrapped in
    ObservabilityError and joined with the primary-path error, if any.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any, Generic, TypeVar

from ..constants import DEFAULT_CTX_KEYS, UNSET
from ..core.context import StreamContext
from ..core.exceptions import ObservabilityError, combine_errors
from ..core.stream import Writer

R = TypeVar("R")


class StatsRecorder(Generic[R]):
    """Stamps and emits stats records for a single tee instance.

    Args:
        writer: Side channel receiving records. None disables emission.
        tag: Tag put on every record (default: "<unset>")
        ctx_keys: Context keys to snapshot into every record
    """

    def __init__(
        self,
        writer: Writer[R] | None,
        tag: str | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self._writer = writer
        self.tag = tag or UNSET
        self.ctx_keys = tuple(ctx_keys) if ctx_keys is not None else DEFAULT_CTX_KEYS
        self._stamp = datetime.now(UTC)

    @property
    def enabled(self) -> bool:
        return self._writer is not None

    def stamp(self) -> tuple[datetime, timedelta]:
        """Return the current time and the time since the previous call."""
        now = datetime.now(UTC)
        delta = now - self._stamp
        self._stamp = now
        return now, delta

    def snapshot(self, ctx: StreamContext | None) -> tuple[tuple[str, Any], ...]:
        if ctx is None:
            return ()
        return ctx.snapshot(self.ctx_keys)

    async def emit(
        self,
        ctx: StreamContext | None,
        record: R,
        *,
        error: Exception | None,
        value: Any,
    ) -> Exception | None:
        """Write ``record`` and join any side-channel failure with ``error``.

        Args:
            ctx: Context of the observed operation
            record: Finished stats record
            error: Operational error from the primary path (or None)
            value: Primary-path value, attached to a side-channel failure

        Returns:
            The error the tee should raise, or None
        """
        if self._writer is None:
            return error

        try:
            await self._writer.write(ctx, record)
        except Exception as e:
            side = ObservabilityError(f"stats write failed for tag {self.tag!r}", value=value)
            side.__cause__ = e
            return combine_errors(error, side)
        return error
