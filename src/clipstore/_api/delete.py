"""Delete endpoint.

Endpoint:
  - POST /delete/{field}
"""

from __future__ import annotations

from clipstore._api._common import field_path
from clipstore._constants import DELETE_ENDPOINT
from clipstore._decoder import JsonScalar, expect_scalar
from clipstore._transport import Transport


async def delete_one(transport: Transport, field: str) -> JsonScalar:
    """Delete *field* and return the server's confirmation message."""
    reply = await transport.request("POST", field_path(DELETE_ENDPOINT, field))
    return expect_scalar(reply)
