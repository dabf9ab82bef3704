"""Pydantic models for the places service JSON payloads."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from places_sync.domain.places import AuthenticatedUser, Place, User


class PlacePayload(BaseModel):
    """Place as sent to and received from the service."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    user_id: UUID | None = Field(default=None, alias="userID")
    name: str
    description: str | None = None
    latitude: float
    longitude: float

    @classmethod
    def from_domain(cls, place: Place) -> "PlacePayload":
        return cls(
            id=place.id,
            user_id=place.user_id,
            name=place.name,
            description=place.description,
            latitude=place.latitude,
            longitude=place.longitude,
        )

    def to_domain(self) -> Place:
        return Place(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            description=self.description,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class UserPayload(BaseModel):
    """Registration payload."""

    id: UUID | None = None
    name: str | None = None
    email: str
    password: str

    @classmethod
    def from_domain(cls, user: User) -> "UserPayload":
        return cls(id=user.id, name=user.name, email=user.email, password=user.password)


class AuthenticatedUserPayload(BaseModel):
    """Login response body."""

    id: UUID

    def to_domain(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=self.id)


_PLACE_LIST = TypeAdapter(list[PlacePayload])


def encode_place(place: Place) -> dict[str, object]:
    """Return the JSON-ready representation of a place."""
    return PlacePayload.from_domain(place).model_dump(mode="json", by_alias=True)


def encode_user(user: User) -> dict[str, object]:
    """Return the JSON-ready representation of a user."""
    return UserPayload.from_domain(user).model_dump(mode="json")


def decode_places(content: bytes) -> list[Place]:
    """Decode a JSON list of places.

    Raises:
        pydantic.ValidationError: If the body is not a list of places.
    """
    return [payload.to_domain() for payload in _PLACE_LIST.validate_json(content)]


def decode_authenticated_user(content: bytes) -> AuthenticatedUser:
    """Decode a login response body.

    Raises:
        pydantic.ValidationError: If the body has no valid ``id``.
    """
    return AuthenticatedUserPayload.model_validate_json(content).to_domain()
