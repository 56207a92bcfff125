"""Fallback values shared by the decorators.

Every decorator argument is optional. When a tag, message, delay or list of
context keys is not given, the values below are used instead.
"""

from __future__ import annotations

# Placeholder for a missing stats tag or log message
UNSET = "<unset>"

# Pacing delay in seconds
DEFAULT_DELAY = 0.0

# Context keys snapshotted into stats records and log lines
DEFAULT_CTX_KEYS: tuple[str, ...] = ()
