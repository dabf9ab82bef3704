"""Request targets for the places HTTP service."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class Operation(StrEnum):
    """Logical operations the service exposes."""

    LIST_ALL = "list_all"
    LIST_FOR_USER = "list_for_user"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    AUTHENTICATE = "authenticate"
    REGISTER = "register"


class HttpMethod(StrEnum):
    """HTTP verbs used by the places service."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Endpoint:
    """Fully-formed request target."""

    url: str
    method: HttpMethod


def resolve(
    operation: Operation,
    base_url: str,
    *,
    user_id: UUID | None = None,
    place_id: UUID | None = None,
) -> Endpoint:
    """Map an operation and its parameters to a URL and method.

    Inputs are not validated. A missing ``user_id`` for ``LIST_FOR_USER``
    yields the unscoped ``/places/users/`` target.
    """
    root = base_url.rstrip("/")
    if operation is Operation.LIST_ALL:
        return Endpoint(f"{root}/places", HttpMethod.GET)
    if operation is Operation.LIST_FOR_USER:
        return Endpoint(f"{root}/places/users/{_segment(user_id)}", HttpMethod.GET)
    if operation is Operation.CREATE:
        return Endpoint(f"{root}/places", HttpMethod.POST)
    if operation is Operation.UPDATE:
        return Endpoint(f"{root}/places", HttpMethod.PUT)
    if operation is Operation.DELETE:
        return Endpoint(f"{root}/places/{_segment(place_id)}", HttpMethod.DELETE)
    if operation is Operation.AUTHENTICATE:
        return Endpoint(f"{root}/users/login", HttpMethod.GET)
    return Endpoint(f"{root}/users", HttpMethod.POST)


def _segment(value: UUID | None) -> str:
    return "" if value is None else str(value)
