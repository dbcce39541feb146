"""Read endpoints.

Endpoints:
  - GET /query
  - GET /query/{field}
"""

from __future__ import annotations

import logging

from clipstore._api._common import field_path
from clipstore._constants import QUERY_ENDPOINT
from clipstore._decoder import JsonScalar, expect_scalar, expect_snapshot
from clipstore._transport import Transport
from clipstore.models.snapshot import StoreSnapshot

_logger = logging.getLogger(__name__)


async def fetch_all(transport: Transport) -> StoreSnapshot:
    """Fetch every field/value pair currently in the store."""
    reply = await transport.request("GET", QUERY_ENDPOINT)
    snapshot = expect_snapshot(reply)
    _logger.debug("Query response decoded count=%d", len(snapshot))
    return snapshot


async def fetch_one(transport: Transport, field: str) -> JsonScalar:
    """Fetch the value stored under *field*.

    A missing field is reported however the backend chooses to report it;
    this function only classifies the exchange.
    """
    reply = await transport.request("GET", field_path(QUERY_ENDPOINT, field))
    return expect_scalar(reply)
