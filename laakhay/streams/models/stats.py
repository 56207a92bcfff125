"""Stats records emitted by the observability tees.

Records follow a fixed schema: tag, value (or batch length), error, an ordered
snapshot of selected context keys, a UTC timestamp and the time elapsed since
the previous record of the same decorator instance.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_serializer

U = TypeVar("U")


def _format_error(error: Exception | None) -> str | None:
    if error is None:
        return None
    return f"{type(error).__name__}: {error}"


class StreamedStats(BaseModel, Generic[U]):
    """One record per observed element."""

    tag: str
    value: U | None = None
    error: Exception | None = None
    context: tuple[tuple[str, Any], ...] = ()
    stamp: datetime
    delta: timedelta

    @field_serializer("error")
    def serialize_error(self, error: Exception | None) -> str | None:
        return _format_error(error)

    @property
    def ctx(self) -> dict[str, Any]:
        """Context snapshot as a dict."""
        return dict(self.context)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class BatchedStats(BaseModel):
    """One record per observed batch; ``length`` replaces the value."""

    tag: str
    length: int = 0
    error: Exception | None = None
    context: tuple[tuple[str, Any], ...] = ()
    stamp: datetime
    delta: timedelta

    @field_serializer("error")
    def serialize_error(self, error: Exception | None) -> str | None:
        return _format_error(error)

    @property
    def ctx(self) -> dict[str, Any]:
        """Context snapshot as a dict."""
        return dict(self.context)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
