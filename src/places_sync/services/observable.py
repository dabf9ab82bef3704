"""Observable value cells for publishing local state."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

Subscriber = Callable[[T], None]

_logger = logging.getLogger(__name__)


@dataclass
class ObservableValue(Generic[T]):
    """Single-writer cell that notifies subscribers of every replacement.

    A new subscriber receives the current value immediately, then each value
    passed to :meth:`set` in order.
    """

    value: T
    _subscribers: list[Subscriber[T]] = field(default_factory=list)

    def subscribe(self, subscriber: Subscriber[T]) -> Callable[[], None]:
        """Register a subscriber and return a callable that removes it."""
        self._subscribers.append(subscriber)
        self._deliver(subscriber, self.value)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def set(self, value: T) -> None:
        """Replace the value and notify every subscriber."""
        self.value = value
        for subscriber in list(self._subscribers):
            self._deliver(subscriber, value)

    def _deliver(self, subscriber: Subscriber[T], value: T) -> None:
        try:
            subscriber(value)
        except Exception:
            _logger.exception("Subscriber %r failed", subscriber)
