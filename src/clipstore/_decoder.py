"""Response classification shared by every endpoint.

The backend answers with a JSON object (``/query``), a JSON-encoded string
(every other route) or, on some error paths, bare text.  The rules here are
strict: a non-2xx status is always a transport failure, and a 2xx body that
is not the expected JSON is a decode failure.  Raw text is never returned.
"""

from __future__ import annotations

import json
from typing import Any, NamedTuple

from pydantic import ValidationError

from clipstore.exceptions import ClipStoreDecodeError, ClipStoreTransportError
from clipstore.models.snapshot import StoreSnapshot

JsonScalar = str | int | float | bool | None


class DecodedResponse(NamedTuple):
    """A 2xx response whose body parsed as JSON."""

    status: int
    endpoint: str
    data: Any


def is_success(status: int) -> bool:
    return 200 <= status < 300


def decode_response(status: int, text: str, endpoint: str) -> DecodedResponse:
    """Classify *status* and parse *text* as JSON.

    Raises
    ------
    ClipStoreTransportError
        For any non-2xx status, whatever the body holds.
    ClipStoreDecodeError
        For a 2xx status with a body that is not valid JSON.
    """
    if not is_success(status):
        raise ClipStoreTransportError(
            f"HTTP {status} from {endpoint}: {text[:200]}",
            status_code=status,
            endpoint=endpoint,
        )

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ClipStoreDecodeError(
            f"Invalid JSON from {endpoint} (HTTP {status}): {text[:200]}",
            status_code=status,
            endpoint=endpoint,
        ) from exc

    return DecodedResponse(status=status, endpoint=endpoint, data=data)


def expect_snapshot(reply: DecodedResponse) -> StoreSnapshot:
    """Require a JSON object of string values."""
    try:
        return StoreSnapshot.model_validate(reply.data)
    except ValidationError as exc:
        raise ClipStoreDecodeError(
            f"Expected a field/value object from {reply.endpoint}, got {type(reply.data).__name__}",
            status_code=reply.status,
            endpoint=reply.endpoint,
        ) from exc


def expect_scalar(reply: DecodedResponse) -> JsonScalar:
    """Require a JSON scalar and return it unchanged."""
    if isinstance(reply.data, (dict, list)):
        raise ClipStoreDecodeError(
            f"Expected a JSON scalar from {reply.endpoint}, got {type(reply.data).__name__}",
            status_code=reply.status,
            endpoint=reply.endpoint,
        )
    data: JsonScalar = reply.data
    return data
