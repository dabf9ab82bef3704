"""Error taxonomy for the places sync layer.

Every exception raised inside the package derives from
:class:`PlacesSyncError`. The sync service contains these at its boundary:
reads degrade to empty collections, writes are logged, and auth flows report
:class:`AuthError` through their failure callback.
"""

from enum import StrEnum


class PlacesSyncError(Exception):
    """Base exception for all places sync errors."""


class TransportFailure(PlacesSyncError):
    """Raised when a request could not be sent or no response arrived."""


class StatusFailure(PlacesSyncError):
    """Raised when the server answered with an unexpected status code.

    Attributes:
        status_code: The HTTP status the server returned.
    """

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Unexpected status code: {status_code}")


class DecodeFailure(PlacesSyncError):
    """Raised when a response body does not match the expected shape."""


class AuthError(StrEnum):
    """Error tag passed to register/authenticate failure callbacks."""

    SOME_ERROR = "some_error"
