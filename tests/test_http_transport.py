"""Tests for the httpx transport adapter."""

import asyncio
import json

import httpx
import pytest

from places_sync.adapters.http_transport import HttpxTransport, TransportRequest
from places_sync.endpoints import Endpoint, HttpMethod
from places_sync.errors import TransportFailure


def test_transport_sends_json_body_and_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    client = HttpxTransport(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )

    response = asyncio.run(
        client.send(
            TransportRequest(
                endpoint=Endpoint("https://places.test/places", HttpMethod.PUT),
                json_body={"name": "Cafe"},
                headers={"Authorization": "Basic abc"},
            )
        )
    )

    assert response.status_code == 200
    assert json.loads(response.content) == {"ok": True}
    assert seen[0].method == "PUT"
    assert seen[0].headers["Content-Type"] == "application/json"
    assert seen[0].headers["Authorization"] == "Basic abc"
    assert json.loads(seen[0].content) == {"name": "Cafe"}


def test_transport_returns_error_statuses() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, content=b"down")

    client = HttpxTransport(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )

    response = asyncio.run(
        client.send(
            TransportRequest(
                endpoint=Endpoint("https://places.test/places", HttpMethod.GET)
            )
        )
    )

    assert response.status_code == 503
    assert response.content == b"down"


def test_transport_wraps_connection_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route to host", request=request)

    client = HttpxTransport(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )

    with pytest.raises(TransportFailure, match="no route to host"):
        asyncio.run(
            client.send(
                TransportRequest(
                    endpoint=Endpoint("https://places.test/places", HttpMethod.GET)
                )
            )
        )


def test_transport_close_releases_client() -> None:
    client = HttpxTransport.create(timeout_seconds=5)

    asyncio.run(client.close())

    assert client.http_client.is_closed
