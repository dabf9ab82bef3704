"""Dependency container wiring for the places client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from places_sync.adapters.http_transport import HttpTransport, HttpxTransport
from places_sync.config import Settings
from places_sync.services.place_store import PlaceStore
from places_sync.services.session import SessionState
from places_sync.services.sync import PlaceSyncService


@dataclass
class AppContainer:
    """Holds client-wide dependencies.

    Building the container sends no requests. Call ``sync_service.start()``
    once the event loop is running to load the shared collection.
    """

    settings: Settings
    transport: HttpTransport
    place_store: PlaceStore
    session: SessionState
    sync_service: PlaceSyncService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    transport = HttpxTransport.create(
        timeout_seconds=resolved_settings.request_timeout_seconds
    )
    place_store = PlaceStore()
    session = SessionState()
    sync_service = PlaceSyncService(
        transport=transport,
        base_url=resolved_settings.api_base_url,
        store=place_store,
        session=session,
    )

    async def close_resources() -> None:
        await sync_service.wait_for_pending()
        await transport.close()

    return AppContainer(
        settings=resolved_settings,
        transport=transport,
        place_store=place_store,
        session=session,
        sync_service=sync_service,
        close_resources=close_resources,
    )
