from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote

import pytest

from clipstore._decoder import DecodedResponse, decode_response
from clipstore.client import ClipStoreClient
from clipstore.config import ClipStoreConfig
from clipstore.exceptions import (
    ClipStoreCommunicationError,
    ClipStoreDecodeError,
    ClipStoreTransportError,
    ClipStoreValidationError,
)
from clipstore.models import StoreSnapshot, UpdateRequest


@dataclass
class FakeClipboardBackend:
    """In-memory stand-in for the clipboard controller.

    ``overrides`` maps an endpoint to a canned ``(status, body)`` reply.
    """

    entries: dict[str, str] = field(default_factory=dict)
    calls: list[tuple[str, str, dict[str, Any] | None]] = field(default_factory=list)
    overrides: dict[str, tuple[int, str]] = field(default_factory=dict)
    next_id: int = 1

    def _reply(self, method: str, endpoint: str, body: dict[str, Any] | None) -> tuple[int, str]:
        if endpoint in self.overrides:
            return self.overrides[endpoint]

        if method == "GET" and endpoint == "/query":
            return 200, json.dumps(self.entries)

        if method == "GET" and endpoint.startswith("/query/"):
            key = unquote(endpoint.removeprefix("/query/"))
            if key not in self.entries:
                return 404, "not found"
            return 200, json.dumps(self.entries[key])

        if method == "POST" and endpoint == "/update":
            assert body is not None
            key = body.get("field")
            if key is None:
                key = f"x{self.next_id}"
                self.next_id += 1
            self.entries[key] = body["value"]
            return 200, json.dumps(f"{key}=={body['value']}")

        if method == "POST" and endpoint.startswith("/delete/"):
            key = unquote(endpoint.removeprefix("/delete/"))
            if key not in self.entries:
                return 404, json.dumps("not found")
            old = self.entries.pop(key)
            return 200, json.dumps(f"deleted '{key}', old value: {old}")

        raise AssertionError(f"Unexpected request in fake backend: {method} {endpoint}")

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
    ) -> DecodedResponse:
        payload = dict(body) if body is not None else None
        self.calls.append((method, endpoint, payload))
        status, text = self._reply(method, endpoint, payload)
        return decode_response(status, text, endpoint)


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeClipboardBackend:
    fake_backend = FakeClipboardBackend()

    async def fake_request(
        _self: Any,
        method: str,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
    ) -> DecodedResponse:
        return await fake_backend.request(method, endpoint, body)

    monkeypatch.setattr("clipstore._transport.HttpTransport.request", fake_request)
    return fake_backend


@pytest.fixture
def client() -> ClipStoreClient:
    return ClipStoreClient(ClipStoreConfig(base_url="http://clip.test"))


@pytest.mark.asyncio
async def test_fetch_all_returns_exact_snapshot(backend: FakeClipboardBackend, client: ClipStoreClient) -> None:
    backend.overrides["/query"] = (200, '{"a":"1","b":"2"}')

    snapshot = await client.fetch_all()

    assert isinstance(snapshot, StoreSnapshot)
    assert snapshot == {"a": "1", "b": "2"}
    assert backend.calls == [("GET", "/query", None)]


@pytest.mark.asyncio
async def test_fetch_all_returns_fresh_snapshot_each_call(
    backend: FakeClipboardBackend, client: ClipStoreClient
) -> None:
    backend.entries["a"] = "1"
    first = await client.fetch_all()
    backend.entries["b"] = "2"
    second = await client.fetch_all()

    assert first == {"a": "1"}
    assert second == {"a": "1", "b": "2"}


@pytest.mark.asyncio
async def test_upsert_without_field_returns_server_message(
    backend: FakeClipboardBackend, client: ClipStoreClient
) -> None:
    backend.overrides["/update"] = (200, '"x1==hello"')

    message = await client.upsert(value="hello")

    assert message == "x1==hello"
    assert backend.calls == [("POST", "/update", {"value": "hello"})]


@pytest.mark.asyncio
async def test_upsert_accepts_request_model_and_mapping(
    backend: FakeClipboardBackend, client: ClipStoreClient
) -> None:
    assert await client.upsert(UpdateRequest(field="k", value="v1")) == "k==v1"
    assert await client.upsert({"field": "k", "value": "v2"}) == "k==v2"

    assert backend.entries == {"k": "v2"}
    assert [call[2] for call in backend.calls] == [
        {"field": "k", "value": "v1"},
        {"field": "k", "value": "v2"},
    ]


@pytest.mark.asyncio
async def test_upsert_empty_field_is_treated_as_omitted(
    backend: FakeClipboardBackend, client: ClipStoreClient
) -> None:
    await client.upsert(field="", value="hello")
    assert backend.calls == [("POST", "/update", {"value": "hello"})]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [{"value": ""}, {}, {"field": "k", "value": ""}, {"value": None}],
)
async def test_upsert_invalid_value_sends_nothing(
    backend: FakeClipboardBackend, client: ClipStoreClient, kwargs: dict[str, Any]
) -> None:
    with pytest.raises(ClipStoreValidationError):
        await client.upsert(**kwargs)

    assert backend.calls == []


@pytest.mark.asyncio
async def test_upsert_invalid_mapping_sends_nothing(backend: FakeClipboardBackend, client: ClipStoreClient) -> None:
    with pytest.raises(ClipStoreValidationError) as exc_info:
        await client.upsert({"value": ""})

    assert isinstance(exc_info.value, ValueError)
    assert backend.calls == []


@pytest.mark.asyncio
async def test_delete_missing_field_is_transport_error(
    backend: FakeClipboardBackend, client: ClipStoreClient
) -> None:
    backend.overrides["/delete/missing"] = (404, '"not found"')

    with pytest.raises(ClipStoreTransportError) as exc_info:
        await client.delete_one("missing")

    exc = exc_info.value
    assert exc.status_code == 404
    assert exc.endpoint == "/delete/missing"


@pytest.mark.asyncio
async def test_fetch_one_plain_text_is_decode_error(backend: FakeClipboardBackend, client: ClipStoreClient) -> None:
    backend.overrides["/query/k"] = (200, "ok")

    with pytest.raises(ClipStoreDecodeError) as exc_info:
        await client.fetch_one("k")

    exc = exc_info.value
    assert exc.status_code == 200
    assert exc.endpoint == "/query/k"


@pytest.mark.asyncio
async def test_fetch_one_returns_scalar_unchanged(backend: FakeClipboardBackend, client: ClipStoreClient) -> None:
    backend.entries["k"] = "line one\nline two"
    assert await client.fetch_one("k") == "line one\nline two"


@pytest.mark.asyncio
async def test_fetch_one_not_found_is_not_special_cased(
    backend: FakeClipboardBackend, client: ClipStoreClient
) -> None:
    backend.overrides["/query/gone"] = (200, "null")
    assert await client.fetch_one("gone") is None

    with pytest.raises(ClipStoreTransportError) as exc_info:
        await client.fetch_one("other")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("method_name", ["fetch_one", "delete_one"])
async def test_empty_field_fails_without_request(
    backend: FakeClipboardBackend, client: ClipStoreClient, method_name: str
) -> None:
    with pytest.raises(ClipStoreValidationError):
        await getattr(client, method_name)("")

    assert backend.calls == []


@pytest.mark.asyncio
async def test_field_is_encoded_as_single_path_segment(
    backend: FakeClipboardBackend, client: ClipStoreClient
) -> None:
    backend.entries["a/b c"] = "v"

    assert await client.fetch_one("a/b c") == "v"
    await client.delete_one("a/b c")

    assert [call[1] for call in backend.calls] == ["/query/a%2Fb%20c", "/delete/a%2Fb%20c"]
    assert backend.entries == {}


@pytest.mark.asyncio
async def test_message_endpoints_reject_json_objects(backend: FakeClipboardBackend, client: ClipStoreClient) -> None:
    backend.overrides["/update"] = (200, '{"message": "ok"}')

    with pytest.raises(ClipStoreDecodeError):
        await client.upsert(value="v")


@pytest.mark.asyncio
async def test_full_round_trip_with_generated_key(backend: FakeClipboardBackend, client: ClipStoreClient) -> None:
    message = await client.upsert(value="hello")
    assert isinstance(message, str)
    new_field = message.split("==")[0]

    assert await client.fetch_one(new_field) == "hello"
    assert new_field in await client.fetch_all()

    await client.delete_one(new_field)
    assert await client.fetch_all() == {}


@pytest.mark.asyncio
async def test_concurrent_calls_are_independent(backend: FakeClipboardBackend, client: ClipStoreClient) -> None:
    backend.entries.update({"a": "1", "b": "2"})
    backend.overrides["/query/bad"] = (500, "boom")

    results = await asyncio.gather(
        client.fetch_one("a"),
        client.fetch_one("bad"),
        client.fetch_one("b"),
        return_exceptions=True,
    )

    assert results[0] == "1"
    assert isinstance(results[1], ClipStoreTransportError)
    assert results[2] == "2"
    assert len(backend.calls) == 3


@pytest.mark.asyncio
async def test_failure_kinds_share_communication_base(
    backend: FakeClipboardBackend, client: ClipStoreClient
) -> None:
    backend.overrides["/query"] = (502, "bad gateway")
    with pytest.raises(ClipStoreCommunicationError):
        await client.fetch_all()

    backend.overrides["/query"] = (200, "<html>")
    with pytest.raises(ClipStoreCommunicationError):
        await client.fetch_all()
