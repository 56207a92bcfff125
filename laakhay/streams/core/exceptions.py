"""Custom exception hierarchy.

Two members of this hierarchy are not failures at all: ``StreamEnded`` and
``SinkClosed`` are the terminal sentinels of the Reader/Writer contract. Every
decorator re-raises them verbatim; anything else is an operational error.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class StreamError(Exception):
    """Base exception for all library errors."""

    pass


class StreamEnded(StreamError, EOFError):
    """Reader has no more values and will never produce another one."""

    def __init__(self, message: str = "stream ended") -> None:
        super().__init__(message)


class SinkClosed(StreamError, BrokenPipeError):
    """Writer refuses further writes, permanently."""

    def __init__(self, message: str = "sink closed") -> None:
        super().__init__(message)


class ContextCancelled(StreamError):
    """A blocking read or write gave up because its context was cancelled."""

    def __init__(self, message: str = "context cancelled") -> None:
        super().__init__(message)


class PaginationError(StreamError, ValueError):
    """Invalid pagination configuration."""

    pass


class ObservabilityError(StreamError):
    """A side-channel (stats or log) write failed.

    The primary operation succeeded, so ``value`` is still valid. The failure
    coming from the side channel is available as ``__cause__``.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class StreamErrorGroup(ExceptionGroup):
    """A primary-path error and a side-channel error raised together."""

    def derive(self, excs: Sequence[Exception]) -> StreamErrorGroup:
        return StreamErrorGroup(self.message, excs)


def is_terminal(error: BaseException | None) -> bool:
    """Return True if ``error`` is one of the two terminal sentinels."""
    return isinstance(error, (StreamEnded, SinkClosed))


def combine_errors(
    primary: Exception | None,
    side: Exception | None,
) -> Exception | None:
    """Join a primary-path error with a side-channel error.

    Args:
        primary: Error from the wrapped Reader/Writer (or None)
        side: Error from the side channel (or None)

    Returns:
        None when both are None, the single error when only one is set,
        otherwise a StreamErrorGroup holding both (primary first)
    """
    if primary is None:
        return side
    if side is None:
        return primary
    return StreamErrorGroup("primary and side-channel errors", [primary, side])
