"""
Custom exceptions for the BucketList backend.

Storage and decode problems are resolved inside their components and never
surface here; these types cover the gate, lookups and the remote fetch.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Authentication gate
    GATE_LOCKED = "GATE_LOCKED"
    LOCKED_OUT = "LOCKED_OUT"
    AUTHENTICATION_IN_PROGRESS = "AUTHENTICATION_IN_PROGRESS"

    # Lookups
    BOOKMARK_NOT_FOUND = "BOOKMARK_NOT_FOUND"
    EDIT_SESSION_NOT_FOUND = "EDIT_SESSION_NOT_FOUND"

    # Remote geosearch
    NEARBY_PLACES_FAILED = "NEARBY_PLACES_FAILED"

    # Generic errors
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class BucketListException(Exception):
    """Base exception for the BucketList backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class GateLockedError(BucketListException):
    """Raised when bookmark content is read before the gate is unlocked."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Authentication required to access saved places",
            error_code=ErrorCode.GATE_LOCKED,
            details=details,
            status_code=401
        )


class LockedOutError(BucketListException):
    """Raised when the gate is permanently blocked after too many failures."""

    def __init__(self, failed_attempts: int, max_attempts: int):
        super().__init__(
            message="Too many failed authentication attempts; access is blocked",
            error_code=ErrorCode.LOCKED_OUT,
            details={"failed_attempts": failed_attempts, "max_attempts": max_attempts},
            status_code=423
        )


class AuthenticationInProgressError(BucketListException):
    """Raised when authenticate() is called while a check is still pending."""

    def __init__(self):
        super().__init__(
            message="An authentication attempt is already in progress",
            error_code=ErrorCode.AUTHENTICATION_IN_PROGRESS,
            status_code=409
        )


class BookmarkNotFoundError(BucketListException):
    """Raised when a bookmark id does not match any saved place."""

    def __init__(self, bookmark_id: Any):
        super().__init__(
            message=f"Bookmark {bookmark_id} not found",
            error_code=ErrorCode.BOOKMARK_NOT_FOUND,
            details={"bookmark_id": str(bookmark_id)},
            status_code=404
        )


class EditSessionNotFoundError(BucketListException):
    """Raised when an edit session id is unknown or already closed."""

    def __init__(self, session_id: Any):
        super().__init__(
            message=f"Edit session {session_id} not found",
            error_code=ErrorCode.EDIT_SESSION_NOT_FOUND,
            details={"session_id": str(session_id)},
            status_code=404
        )


class NearbyPlacesError(BucketListException):
    """Raised when the geosearch request or its decoding fails."""

    def __init__(self, message: str = "Nearby places lookup failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.NEARBY_PLACES_FAILED,
            details=details,
            status_code=502
        )
