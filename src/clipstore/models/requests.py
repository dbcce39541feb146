"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`clipstore.client.ClipStoreClient`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

_DOT_SEGMENTS = frozenset({".", ".."})


class FieldRequest(BaseModel):
    """Request addressing one stored field."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    field: str

    @field_validator("field")
    @classmethod
    def _field_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("field must be non-empty")
        # HTTP clients collapse dot segments, so these would address another route.
        if value in _DOT_SEGMENTS:
            raise ValueError(f"field {value!r} cannot be addressed in a URL path")
        return value


class UpdateRequest(BaseModel):
    """Body of ``POST /update``.

    Leaving ``field`` unset (or passing ``""``) asks the server to
    generate a key.  ``value`` is stored verbatim and must be non-empty.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    field: str | None = None
    value: str

    @field_validator("field")
    @classmethod
    def _empty_field_means_generated(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("value")
    @classmethod
    def _value_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("value is required for update operation")
        return value

    def to_body(self) -> dict[str, Any]:
        """JSON body for the wire; ``field`` is omitted when unset."""
        return self.model_dump(exclude_none=True)
