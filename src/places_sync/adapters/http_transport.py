"""HTTP transport adapter for the places service."""

from dataclasses import dataclass, field
from typing import Protocol

import httpx

from places_sync.endpoints import Endpoint
from places_sync.errors import TransportFailure


@dataclass(frozen=True)
class TransportRequest:
    """A single request to send."""

    endpoint: Endpoint
    json_body: dict[str, object] | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of a completed exchange."""

    status_code: int
    content: bytes = b""


class HttpTransport(Protocol):
    """Interface for exchanging requests with the places service."""

    async def send(self, request: TransportRequest) -> TransportResponse:
        """Send a request and return the response.

        Non-2xx responses are returned, not raised. Connection-level
        problems raise :class:`TransportFailure`.
        """


@dataclass
class HttpxTransport(HttpTransport):
    """HTTPX-backed transport."""

    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, timeout_seconds: float = 15) -> "HttpxTransport":
        """Create a transport with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(), timeout_seconds=timeout_seconds)

    async def send(self, request: TransportRequest) -> TransportResponse:
        """Send the request with httpx."""
        try:
            response = await self.http_client.request(
                request.endpoint.method.value,
                request.endpoint.url,
                json=request.json_body,
                headers=request.headers,
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise TransportFailure(str(exc) or type(exc).__name__) from exc
        return TransportResponse(
            status_code=response.status_code, content=response.content
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
