"""Shared helpers for clipboard endpoint modules.

It is internal to clipstore and may change at any time.
"""

from __future__ import annotations

from urllib.parse import quote


def field_path(prefix: str, field: str) -> str:
    """Append *field* to *prefix* as one percent-encoded path segment.

    ``/`` is encoded too, so a key such as ``"a/b"`` cannot reach a
    different route.
    """
    return f"{prefix}/{quote(field, safe='')}"
