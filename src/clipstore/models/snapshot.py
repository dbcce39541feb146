"""Full-store snapshot returned by ``/query``."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import TypeAdapter

_SNAPSHOT_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])


class StoreSnapshot(Mapping[str, str]):
    """Read-only ``field -> value`` mapping captured from one response.

    Compares equal to any mapping holding the same items, so it can be
    checked directly against a plain ``dict``.  Each ``fetch_all`` call
    returns a new snapshot; nothing is cached between calls.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    @classmethod
    def model_validate(cls, data: Any) -> StoreSnapshot:
        """Build a snapshot from decoded JSON.

        Raises :class:`pydantic.ValidationError` unless *data* is an object
        whose values are all strings.  No coercion is applied.
        """
        return cls(_SNAPSHOT_ADAPTER.validate_python(data, strict=True))

    def __getitem__(self, field: str) -> str:
        return self._entries[field]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"StoreSnapshot({self._entries!r})"

    def to_dict(self) -> dict[str, str]:
        """Return a mutable copy of the entries."""
        return dict(self._entries)
