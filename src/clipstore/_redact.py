"""Helpers for safe debug logging.

Clipboard entries routinely hold things people copy around: passwords,
tokens, private notes.  Request bodies pass through here before they reach
DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_REDACTED_KEYS: frozenset[str] = frozenset({"value"})


def _truncate(text: str, max_string: int) -> str:
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def redact_for_log(body: Mapping[str, Any] | None, *, max_string: int = 256) -> dict[str, Any] | None:
    """Return a copy of a request *body* with stored values hidden."""
    if body is None:
        return None

    redacted: dict[str, Any] = {}
    for key, item in body.items():
        if key in _REDACTED_KEYS:
            redacted[key] = "<redacted>"
        elif isinstance(item, str):
            redacted[key] = _truncate(item, max_string)
        else:
            redacted[key] = item
    return redacted
