"""High-level async client for the clipboard service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from clipstore._api import delete as _delete_api
from clipstore._api import query as _query_api
from clipstore._api import update as _update_api
from clipstore._decoder import JsonScalar
from clipstore._transport import HttpTransport
from clipstore.config import ClipStoreConfig
from clipstore.exceptions import ClipStoreValidationError
from clipstore.models.requests import FieldRequest, UpdateRequest
from clipstore.models.snapshot import StoreSnapshot

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _validate(model: type[M], data: Mapping[str, Any]) -> M:
    """Validate *data* into *model*, reporting failures as ClipStoreValidationError."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        reasons = "; ".join(str(err.get("msg", "")) for err in exc.errors())
        raise ClipStoreValidationError(f"Invalid {model.__name__}: {reasons}") from exc


class ClipStoreClient:
    """Async client for the shared clipboard store.

    Each operation sends exactly one request and keeps no state between
    calls.  Used bare, every call opens its own HTTP session::

        client = ClipStoreClient(ClipStoreConfig.from_env())
        snapshot = await client.fetch_all()

    Inside ``async with`` the calls share one connection pool::

        async with ClipStoreClient(config) as client:
            message = await client.upsert(value="hello")
    """

    def __init__(
        self,
        config: ClipStoreConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session

    @property
    def config(self) -> ClipStoreConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ClipStoreClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    def _transport(self) -> HttpTransport:
        return HttpTransport(self._config, self._http_session)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def fetch_all(self) -> StoreSnapshot:
        """Return every field/value pair as one read-only snapshot."""
        return await _query_api.fetch_all(self._transport())

    async def fetch_one(self, field: str) -> JsonScalar:
        """Return the value stored under *field*.

        Raises :class:`~clipstore.exceptions.ClipStoreValidationError` for an
        empty field without contacting the server.
        """
        request = _validate(FieldRequest, {"field": field})
        return await _query_api.fetch_one(self._transport(), request.field)

    async def upsert(
        self,
        request: UpdateRequest | Mapping[str, Any] | None = None,
        *,
        value: str | None = None,
        field: str | None = None,
    ) -> JsonScalar:
        """Set *value* under *field*, or under a server-generated key.

        Accepts either a prepared :class:`UpdateRequest` (or an equivalent
        mapping) or the ``value``/``field`` keywords.  An empty value fails
        validation before any request is sent.

        Returns the server's message verbatim, e.g. ``"x1==hello"`` when a
        key was generated.
        """
        if isinstance(request, UpdateRequest):
            validated = request
        elif request is not None:
            validated = _validate(UpdateRequest, dict(request))
        else:
            validated = _validate(UpdateRequest, {"field": field, "value": value})

        if validated.field is None:
            _logger.debug("Upsert without field; server will generate a key")
        return await _update_api.upsert(self._transport(), validated)

    async def delete_one(self, field: str) -> JsonScalar:
        """Delete *field* and return the server's message verbatim."""
        request = _validate(FieldRequest, {"field": field})
        return await _delete_api.delete_one(self._transport(), request.field)
