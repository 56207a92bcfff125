"""Cancellation-aware context passed to every read and write.

Architecture:
    A StreamContext pairs an immutable mapping of values with a cooperative
    cancellation scope. Deriving values (``with_values``) shares the scope;
    deriving a child (``child``) creates a nested scope that is cancelled
    together with its parent but can also be cancelled on its own.

    Cancellation is advisory. It never interrupts an in-flight read or write;
    pacing decorators race their timers against it and the pump checks it at
    loop boundaries.
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any


class _CancelScope:
    def __init__(self, parent: _CancelScope | None = None) -> None:
        self._event = asyncio.Event()
        self._children: weakref.WeakSet[_CancelScope] = weakref.WeakSet()
        if parent is not None:
            parent._children.add(self)
            if parent.cancelled:
                self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        if self._event.is_set():
            return
        self._event.set()
        for child in list(self._children):
            child.cancel()

    async def wait(self) -> None:
        await self._event.wait()


class StreamContext:
    """Values plus a cooperative cancellation scope.

    Example:
        >>> ctx = StreamContext.background().with_values(job="import")
        >>> child = ctx.child()
        >>> ctx.cancel()
        >>> child.cancelled
        True
    """

    __slots__ = ("_values", "_scope")

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        *,
        _scope: _CancelScope | None = None,
    ) -> None:
        self._values: Mapping[str, Any] = MappingProxyType(dict(values or {}))
        self._scope = _scope or _CancelScope()

    @classmethod
    def background(cls) -> StreamContext:
        """Return a fresh, empty, never-cancelled-yet context."""
        return cls()

    def with_values(self, **values: Any) -> StreamContext:
        """Derive a context with extra values, sharing this cancellation scope."""
        merged = {**self._values, **values}
        return StreamContext(merged, _scope=self._scope)

    def child(self) -> StreamContext:
        """Derive an independently cancellable context.

        Cancelling the returned context leaves this one untouched; cancelling
        this one cancels the returned context as well.
        """
        return StreamContext(self._values, _scope=_CancelScope(self._scope))

    def value(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    @property
    def values(self) -> Mapping[str, Any]:
        return self._values

    def snapshot(self, keys: Iterable[str]) -> tuple[tuple[str, Any], ...]:
        """Return ``(key, value)`` pairs for ``keys``, in the order given."""
        return tuple((key, self._values.get(key)) for key in keys)

    @property
    def cancelled(self) -> bool:
        return self._scope.cancelled

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._scope.cancel()

    async def done(self) -> None:
        """Wait until this context is cancelled."""
        await self._scope.wait()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"StreamContext({dict(self._values)!r}, {state})"


def ensure_context(ctx: StreamContext | None) -> StreamContext:
    """Treat a missing context as a fresh background context."""
    if ctx is None:
        return StreamContext.background()
    return ctx
