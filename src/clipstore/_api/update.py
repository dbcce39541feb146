"""Update endpoint.

Endpoint:
  - POST /update
"""

from __future__ import annotations

from clipstore._constants import UPDATE_ENDPOINT
from clipstore._decoder import JsonScalar, expect_scalar
from clipstore._transport import Transport
from clipstore.models.requests import UpdateRequest


async def upsert(transport: Transport, request: UpdateRequest) -> JsonScalar:
    """Create or overwrite an entry and return the server's message.

    On key generation the backend answers ``"<field>==<value>"``; the message
    is passed through untouched either way.
    """
    reply = await transport.request("POST", UPDATE_ENDPOINT, request.to_body())
    return expect_scalar(reply)
