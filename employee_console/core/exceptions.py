"""Domain errors raised by services and mapped to HTTP responses by the web app."""
from typing import Any, Dict, Optional


class ConsoleError(Exception):
    """Base class for every error the console reports to the caller."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_response(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class InvalidInputError(ConsoleError):
    """Bad input shape or size."""

    status_code = 400
    default_message = "Invalid input"


class ImageTooLargeError(InvalidInputError):
    status_code = 413


class AuthenticationError(ConsoleError):
    status_code = 401
    default_message = "Not authenticated"


class PermissionDeniedError(ConsoleError):
    status_code = 403
    default_message = "Permission denied"


class NotFoundError(ConsoleError):
    """An id did not resolve to a row."""

    status_code = 404
    default_message = "Not found"


class CategoryNotFoundError(NotFoundError):
    pass


class ConflictError(ConsoleError):
    status_code = 409
    default_message = "Conflict"


class CategoryHasChildrenError(ConflictError):
    """Delete refused because rows at the next level still reference the category."""

    def __init__(self, message: str, child_count: int):
        super().__init__(message)
        self.child_count = child_count

    def to_response(self) -> Dict[str, Any]:
        response = super().to_response()
        response["child_count"] = self.child_count
        return response


class ConsistencyError(ConflictError):
    """
    A write matched zero rows even though the existence check passed.

    The cause (row-level permissions or a concurrent delete) cannot be told
    apart at this layer, so the message stays generic.
    """

    default_message = "The change was not applied. Please refresh and try again."


class UpstreamError(ConsoleError):
    """Storage or identity provider failure."""

    status_code = 502
    default_message = "Upstream service failed"
