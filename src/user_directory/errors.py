"""Error taxonomy for the directory service.

Every error carries the HTTP status it maps to and a user-facing
``error`` string. The API layer renders them as ``{"error": ..., "message": ...}``.
"""

GENERIC_STORE_MESSAGE = "An internal error occurred."


class DirectoryError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, error: str, message: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.message = message

    def to_dict(self) -> dict[str, str]:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        return body


class ValidationError(DirectoryError):
    """Bad or missing input. Raised before any store access."""

    status_code = 400


class NotFoundError(DirectoryError):
    """The requested record does not exist."""

    status_code = 404


class ConflictError(DirectoryError):
    """The state transition does not apply (already deleted or lost a race)."""

    status_code = 409


class MethodNotAllowedError(DirectoryError):
    """The endpoint exists but does not accept this HTTP method."""

    status_code = 405


class StoreError(DirectoryError):
    """The record store is unreachable or a query failed.

    The message is always generic; the underlying exception is chained
    for server-side logging only.
    """

    status_code = 500

    def __init__(self, error: str, message: str | None = None) -> None:
        super().__init__(error, message or GENERIC_STORE_MESSAGE)
