"""Domain models for shared places and users."""

from dataclasses import dataclass, replace
from uuid import UUID, uuid4


@dataclass(frozen=True)
class Place:
    """Represents a shared point of interest."""

    id: UUID
    name: str
    latitude: float
    longitude: float
    description: str | None = None
    user_id: UUID | None = None

    @classmethod
    def draft(
        cls,
        name: str,
        latitude: float,
        longitude: float,
        description: str | None = None,
    ) -> "Place":
        """Create a local draft with a fresh id and no owner."""
        return cls(
            id=uuid4(),
            name=name,
            latitude=latitude,
            longitude=longitude,
            description=description,
        )

    def with_owner(self, user_id: UUID) -> "Place":
        """Return a copy of the place owned by the given user."""
        return replace(self, user_id=user_id)


@dataclass(frozen=True)
class User:
    """Registration and login payload. Never stored locally."""

    email: str
    password: str
    name: str | None = None
    id: UUID | None = None


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity returned by a successful login."""

    id: UUID
