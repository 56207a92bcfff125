"""Cancellation-raced timer shared by the pacing decorators."""

from __future__ import annotations

import asyncio
from datetime import timedelta

from ..constants import DEFAULT_DELAY
from ..core.context import StreamContext, ensure_context


def to_seconds(delay: float | timedelta | None) -> float:
    """Normalize a delay to seconds; None and negatives become 0.0."""
    if delay is None:
        return DEFAULT_DELAY
    if isinstance(delay, timedelta):
        delay = delay.total_seconds()
    return max(0.0, float(delay))


async def sleep_or_cancelled(ctx: StreamContext | None, delay: float) -> bool:
    """Sleep for ``delay`` seconds unless ``ctx`` is cancelled first.

    Cancellation is checked before anything else, including for zero delays.

    Returns:
        True if cancellation won the race, False if the timer did
    """
    ctx = ensure_context(ctx)
    if ctx.cancelled:
        return True
    if delay <= 0:
        return False

    try:
        await asyncio.wait_for(ctx.done(), timeout=delay)
    except TimeoutError:
        return False
    return True
