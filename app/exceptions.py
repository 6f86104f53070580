"""Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to and a message that is safe
to show to API clients.
"""


class AppError(Exception):
    """Base error rendered as ``{"error": message}``."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """A contest or contestant does not exist."""

    status_code = 404


class ValidationError(AppError):
    """A required field is missing or a value is out of bounds."""

    status_code = 400


class ContestClosedError(AppError):
    """A vote was cast on a contest that is no longer active."""

    status_code = 409


class StorageError(AppError):
    """The key-value store is unreachable or returned malformed data."""

    status_code = 500
