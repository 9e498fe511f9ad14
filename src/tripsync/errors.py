"""
Custom exceptions and error handling for Trip Sync.

Defines application-specific exceptions with error codes and HTTP status
codes so every endpoint maps failures to the same JSON error body.

Usage:
    from tripsync.errors import ForbiddenError, ErrorCode

    raise ForbiddenError("Only organizers can toggle proposals")
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Authentication errors
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors
    FORBIDDEN = "FORBIDDEN"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Store and transport errors
    STORE_ERROR = "STORE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.UNAUTHORIZED: "Please sign in to continue.",
    ErrorCode.INVALID_TOKEN: "Your session has expired. Please sign in again.",
    ErrorCode.FORBIDDEN: "You don't have permission to do that on this trip.",
    ErrorCode.NOT_FOUND: "We couldn't find what you were looking for.",
    ErrorCode.CONFLICT: "That already exists.",
    ErrorCode.VALIDATION_ERROR: "Your request contains invalid information. Please check and try again.",
    ErrorCode.INVALID_REQUEST: "Invalid request format. Please try again.",
    ErrorCode.STORE_ERROR: "Something went wrong saving your changes. Please try again.",
    ErrorCode.NETWORK_ERROR: "Unable to reach the server. Please check your connection.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}


class TripSyncError(Exception):
    """Base exception for all Trip Sync errors."""

    status_code = 500

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code.value}


class AuthenticationError(TripSyncError):
    """No usable identity: missing session or a token that failed verification."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", code: ErrorCode = ErrorCode.UNAUTHORIZED):
        super().__init__(message, code)


UnauthorizedError = AuthenticationError


class ForbiddenError(TripSyncError):
    """Authenticated, but not permitted on this trip or resource."""

    status_code = 403

    def __init__(self, message: str = "Forbidden", code: ErrorCode = ErrorCode.FORBIDDEN):
        super().__init__(message, code)


class NotFoundError(TripSyncError):
    status_code = 404

    def __init__(self, message: str = "Not found", code: ErrorCode = ErrorCode.NOT_FOUND):
        super().__init__(message, code)


class ConflictError(TripSyncError):
    status_code = 409

    def __init__(self, message: str, code: ErrorCode = ErrorCode.CONFLICT):
        super().__init__(message, code)


class ValidationError(TripSyncError):
    """Input validation or schema validation failed.

    ``issues`` carries the per-field problems reported by the schema, in the
    shape pydantic produces (``loc``, ``msg``, ``type``).
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        issues: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message, code)
        self.issues = issues or []

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        if self.issues:
            body["details"] = self.issues
        return body


class StoreError(TripSyncError):
    """Opaque failure from the persistence layer."""

    status_code = 500

    def __init__(self, message: str, code: ErrorCode = ErrorCode.STORE_ERROR):
        super().__init__(message, code)


class NetworkError(TripSyncError):
    """Client-side fetch failure: transport error or a non-2xx response."""

    def __init__(self, message: str, status: int | None = None, code: ErrorCode = ErrorCode.NETWORK_ERROR):
        super().__init__(message, code)
        self.status = status
