"""Structured log line emission for the logging decorators.

Log record format (fields passed through ``extra``):

    msg: the decorator's configured message ("<unset>" if not set)
    err: the operation's exception, or None
    val: the formatted value (streamed decorators)
    len: the batch length (batched decorators)
    ctx: {key: value} for the configured context keys

Level is INFO, or ERROR when ``err`` is an operational error. The terminal
sentinels never raise the level.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..constants import DEFAULT_CTX_KEYS, UNSET
from ..core.context import StreamContext
from ..core.exceptions import is_terminal

logger = logging.getLogger(__name__)


class LineEmitter:
    """Holds a decorator's logger, message and context keys.

    Args:
        log: Logger to write to (default: this module's logger)
        msg: Log message (default: "<unset>")
        ctx_keys: Context keys to include under "ctx"
    """

    def __init__(
        self,
        log: logging.Logger | logging.LoggerAdapter | None = None,
        msg: str | None = None,
        ctx_keys: Iterable[str] | None = None,
    ) -> None:
        self.logger = log if log is not None else logger
        self.msg = msg or UNSET
        self.ctx_keys = tuple(ctx_keys) if ctx_keys is not None else DEFAULT_CTX_KEYS

    def ctx_map(self, ctx: StreamContext | None) -> dict[str, Any]:
        if ctx is None:
            return {}
        return dict(ctx.snapshot(self.ctx_keys))

    def emit(
        self,
        ctx: StreamContext | None,
        *,
        error: Exception | None,
        field: str,
        value: Any,
    ) -> None:
        level = logging.INFO
        if error is not None and not is_terminal(error):
            level = logging.ERROR

        self.logger.log(
            level,
            self.msg,
            extra={
                "err": error,
                field: value,
                "ctx": self.ctx_map(ctx),
            },
        )
