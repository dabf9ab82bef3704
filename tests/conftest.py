"""Shared test fixtures."""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID

import pytest

from places_sync.adapters.http_transport import (
    HttpTransport,
    TransportRequest,
    TransportResponse,
)
from places_sync.config import Settings
from places_sync.domain.places import Place
from places_sync.errors import TransportFailure
from places_sync.services.place_store import PlaceStore
from places_sync.services.session import SessionState
from places_sync.services.sync import PlaceSyncService, SyncOutcome

BASE_URL = "https://places.test/api"

USER_ID = UUID("6f1c2a52-3b9e-4d0a-8d7e-2f0a1b3c4d5e")


def place_json(place: Place) -> dict[str, object]:
    return {
        "id": str(place.id),
        "userID": str(place.user_id) if place.user_id else None,
        "name": place.name,
        "description": place.description,
        "latitude": place.latitude,
        "longitude": place.longitude,
    }


def json_response(payload: object, status_code: int = 200) -> TransportResponse:
    return TransportResponse(
        status_code=status_code, content=json.dumps(payload).encode()
    )


Handler = Callable[[TransportRequest], TransportResponse]


@dataclass
class FakeTransport(HttpTransport):
    """Transport that records requests and answers from a handler."""

    handler: Handler = lambda request: TransportResponse(status_code=200)
    requests: list[TransportRequest] = field(default_factory=list)

    async def send(self, request: TransportRequest) -> TransportResponse:
        self.requests.append(request)
        return self.handler(request)

    def urls(self) -> list[str]:
        return [request.endpoint.url for request in self.requests]


def failing_handler(request: TransportRequest) -> TransportResponse:
    raise TransportFailure("connection refused")


@dataclass
class RecordingTrace:
    outcomes: list[SyncOutcome] = field(default_factory=list)

    def __call__(self, outcome: SyncOutcome) -> None:
        self.outcomes.append(outcome)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url=BASE_URL)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def trace() -> RecordingTrace:
    return RecordingTrace()


@pytest.fixture
def service(transport: FakeTransport, trace: RecordingTrace) -> PlaceSyncService:
    return PlaceSyncService(
        transport=transport,
        base_url=BASE_URL,
        store=PlaceStore(),
        session=SessionState(),
        trace=trace,
    )


@pytest.fixture
def cafe() -> Place:
    return Place(
        id=UUID("11111111-1111-4111-8111-111111111111"),
        name="Corner Cafe",
        latitude=55.75,
        longitude=37.61,
        description="Flat white",
        user_id=USER_ID,
    )


@pytest.fixture
def park() -> Place:
    return Place(
        id=UUID("22222222-2222-4222-8222-222222222222"),
        name="River Park",
        latitude=55.73,
        longitude=37.60,
        user_id=USER_ID,
    )
