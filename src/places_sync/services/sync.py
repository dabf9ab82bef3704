"""Sync operations between the places service and the local store."""

import asyncio
import base64
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4

from pydantic import ValidationError

from places_sync.adapters.http_transport import (
    HttpTransport,
    TransportRequest,
    TransportResponse,
)
from places_sync.adapters.wire_models import (
    decode_authenticated_user,
    decode_places,
    encode_place,
    encode_user,
)
from places_sync.domain.places import AuthenticatedUser, Place, User
from places_sync.endpoints import Endpoint, Operation, resolve
from places_sync.errors import (
    AuthError,
    DecodeFailure,
    PlacesSyncError,
    StatusFailure,
)
from places_sync.services.place_store import PlaceStore
from places_sync.services.session import SessionState

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncOutcome:
    """Result of a single sync operation, reported to the trace hook."""

    operation: Operation
    succeeded: bool
    detail: str = ""


@dataclass
class PlaceSyncService:
    """Issues requests to the places service and applies their results.

    All state lives in ``store`` and ``session`` and is only touched from
    the event loop that awaits these coroutines. Reads fall back to an empty
    collection on any failure. Writes change local state only after the
    server accepts them and otherwise just log. Register and authenticate
    report through separate success and failure callbacks.
    """

    transport: HttpTransport
    base_url: str
    store: PlaceStore = field(default_factory=PlaceStore)
    session: SessionState = field(default_factory=SessionState)
    trace: Callable[[SyncOutcome], None] | None = None
    _pending: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.session.on_user_changed(self._schedule_user_refresh)

    def start(self) -> None:
        """Schedule the initial load of the shared collection.

        Must be called while the event loop is running.
        """
        self._spawn(self.load_all)

    async def wait_for_pending(self) -> None:
        """Wait until every background load scheduled so far has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def load_all(self) -> None:
        """Replace the shared collection with the server's list."""
        endpoint = resolve(Operation.LIST_ALL, self.base_url)
        places = await self._load(Operation.LIST_ALL, endpoint)
        self.store.replace_all(places)

    async def load_for_user(self, user_id: UUID | None) -> None:
        """Replace the per-user collection with the server's list."""
        endpoint = resolve(Operation.LIST_FOR_USER, self.base_url, user_id=user_id)
        places = await self._load(Operation.LIST_FOR_USER, endpoint)
        self.store.replace_user_places(places)

    async def create_place(self, place: Place) -> None:
        """Submit a new place owned by the session user.

        Without a session a random owner id is used. The owned copy is what
        gets appended locally once the server answers 200.
        """
        owned = place.with_owner(self.session.current_user_id or uuid4())
        request = TransportRequest(
            endpoint=resolve(Operation.CREATE, self.base_url),
            json_body=encode_place(owned),
        )
        if await self._write(Operation.CREATE, request, require_ok=True):
            _logger.info("Place %s (%s) created", owned.id, owned.name)
            self.store.append(owned)

    async def update_place(self, place: Place) -> None:
        """Send the full place and swap it into both collections on 200."""
        request = TransportRequest(
            endpoint=resolve(Operation.UPDATE, self.base_url),
            json_body=encode_place(place),
        )
        if await self._write(Operation.UPDATE, request, require_ok=True):
            _logger.info("Place %s (%s) updated", place.id, place.name)
            self.store.replace(place)

    async def delete_place(self, place_id: UUID) -> None:
        """Delete a place and drop it from both collections."""
        request = TransportRequest(
            endpoint=resolve(Operation.DELETE, self.base_url, place_id=place_id)
        )
        if await self._write(Operation.DELETE, request, require_ok=False):
            _logger.info("Place %s deleted", place_id)
            self.store.remove(place_id)

    async def register_user(
        self,
        user: User,
        on_success: Callable[[], None],
        on_failure: Callable[[AuthError], None],
    ) -> None:
        """Create an account. Exactly one of the callbacks is called."""
        request = TransportRequest(
            endpoint=resolve(Operation.REGISTER, self.base_url),
            json_body=encode_user(user),
        )
        try:
            await self.transport.send(request)
        except PlacesSyncError as exc:
            _logger.warning("Registration of %s failed: %s", user.email, exc)
            self._record(Operation.REGISTER, succeeded=False, detail=str(exc))
            on_failure(AuthError.SOME_ERROR)
            return
        _logger.info("User %s registered", user.email)
        self._record(Operation.REGISTER, succeeded=True)
        on_success()

    async def authenticate_user(
        self,
        user: User,
        on_success: Callable[[], None],
        on_failure: Callable[[AuthError], None],
    ) -> None:
        """Log in with HTTP Basic credentials.

        On success the callback runs first, then the session user is set,
        which schedules a refresh of the per-user collection.
        """
        request = TransportRequest(
            endpoint=resolve(Operation.AUTHENTICATE, self.base_url),
            headers={"Authorization": basic_authorization(user.email, user.password)},
        )
        try:
            response = await self.transport.send(request)
            authenticated = _decode_login(response)
        except PlacesSyncError as exc:
            _logger.warning("Authentication of %s failed: %s", user.email, exc)
            self._record(Operation.AUTHENTICATE, succeeded=False, detail=str(exc))
            on_failure(AuthError.SOME_ERROR)
            return
        _logger.info("User %s authenticated", authenticated.id)
        self._record(Operation.AUTHENTICATE, succeeded=True)
        try:
            on_success()
        finally:
            self.session.current_user_id = authenticated.id

    async def _load(self, operation: Operation, endpoint: Endpoint) -> list[Place]:
        try:
            response = await self.transport.send(TransportRequest(endpoint=endpoint))
            if response.status_code != 200:
                raise StatusFailure(response.status_code)
            places = _decode_places(response)
        except PlacesSyncError as exc:
            _logger.warning(
                "Loading %s failed, using empty list: %s", endpoint.url, exc
            )
            self._record(operation, succeeded=False, detail=str(exc))
            return []
        self._record(operation, succeeded=True, detail=f"{len(places)} places")
        return places

    async def _write(
        self, operation: Operation, request: TransportRequest, *, require_ok: bool
    ) -> bool:
        try:
            response = await self.transport.send(request)
            if require_ok and response.status_code != 200:
                raise StatusFailure(response.status_code)
        except PlacesSyncError as exc:
            _logger.warning("Place %s failed: %s", operation.value, exc)
            self._record(operation, succeeded=False, detail=str(exc))
            return False
        self._record(operation, succeeded=True)
        return True

    def _record(
        self, operation: Operation, *, succeeded: bool, detail: str = ""
    ) -> None:
        if self.trace is not None:
            self.trace(SyncOutcome(operation, succeeded, detail))

    def _schedule_user_refresh(self, user_id: UUID | None) -> None:
        self._spawn(self.load_for_user, user_id)

    def _spawn(
        self, factory: Callable[..., Coroutine[Any, Any, None]], *args: Any
    ) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(factory(*args))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


def basic_authorization(email: str, password: str) -> str:
    """Build an HTTP Basic ``Authorization`` header value."""
    encoded = base64.b64encode(f"{email}:{password}".encode()).decode("ascii")
    return f"Basic {encoded}"


def _decode_places(response: TransportResponse) -> list[Place]:
    try:
        return decode_places(response.content)
    except ValidationError as exc:
        raise DecodeFailure("Response is not a list of places") from exc


def _decode_login(response: TransportResponse) -> AuthenticatedUser:
    try:
        return decode_authenticated_user(response.content)
    except ValidationError as exc:
        raise DecodeFailure("Response has no user id") from exc
