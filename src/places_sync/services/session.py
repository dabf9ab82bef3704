"""Authenticated session state."""

from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID

UserChangeListener = Callable[[UUID | None], None]


@dataclass
class SessionState:
    """Holds the current user id and reports every assignment.

    Listeners run before the id is stored, so a listener that raises leaves
    the previous id in place. Assigning the same id again still notifies
    listeners. There is no way to clear the session once a user is set.
    """

    _current_user_id: UUID | None = None
    _listeners: list[UserChangeListener] = field(default_factory=list)

    @property
    def current_user_id(self) -> UUID | None:
        return self._current_user_id

    @current_user_id.setter
    def current_user_id(self, user_id: UUID) -> None:
        for listener in list(self._listeners):
            listener(user_id)
        self._current_user_id = user_id

    def on_user_changed(self, listener: UserChangeListener) -> None:
        """Register a listener called with each newly assigned id."""
        self._listeners.append(listener)
