"""Local copies of the shared and per-user place collections."""

from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID

from places_sync.domain.places import Place
from places_sync.services.observable import ObservableValue

PlaceCollection = tuple[Place, ...]


def _empty() -> ObservableValue[PlaceCollection]:
    return ObservableValue(())


@dataclass
class PlaceStore:
    """Owns ``all_places`` and ``user_places``.

    Only the sync service writes to the store. Every write publishes a new
    tuple, so readers never see a collection change under them. Writes that
    target both collections apply to each independently; the user collection
    is not checked against the shared one.
    """

    all_places: ObservableValue[PlaceCollection] = field(default_factory=_empty)
    user_places: ObservableValue[PlaceCollection] = field(default_factory=_empty)

    def _collections(self) -> tuple[ObservableValue[PlaceCollection], ...]:
        return (self.all_places, self.user_places)

    def replace_all(self, places: list[Place] | PlaceCollection) -> None:
        """Replace the shared collection."""
        self.all_places.set(tuple(places))

    def replace_user_places(self, places: list[Place] | PlaceCollection) -> None:
        """Replace the per-user collection."""
        self.user_places.set(tuple(places))

    def append(self, place: Place) -> None:
        """Append to both collections without checking for an existing id."""
        for collection in self._collections():
            collection.set((*collection.value, place))

    def replace(self, place: Place) -> None:
        """Swap every entry with the place's id in both collections.

        Collections without a matching entry are left as they are.
        """
        for collection in self._collections():
            if any(existing.id == place.id for existing in collection.value):
                collection.set(
                    tuple(
                        place if existing.id == place.id else existing
                        for existing in collection.value
                    )
                )

    def remove(self, place_id: UUID) -> None:
        """Drop every entry with the given id from both collections."""
        for collection in self._collections():
            remaining = tuple(
                place for place in collection.value if place.id != place_id
            )
            if len(remaining) != len(collection.value):
                collection.set(remaining)

    def subscribe_all(
        self, subscriber: Callable[[PlaceCollection], None]
    ) -> Callable[[], None]:
        """Observe the shared collection."""
        return self.all_places.subscribe(subscriber)

    def subscribe_user(
        self, subscriber: Callable[[PlaceCollection], None]
    ) -> Callable[[], None]:
        """Observe the per-user collection."""
        return self.user_places.subscribe(subscriber)
