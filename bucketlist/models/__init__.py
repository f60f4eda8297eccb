"""
Domain models for the BucketList backend.
"""

from .auth import AuthState, AuthStatus, FailureReason, MAX_FAILED_ATTEMPTS
from .bookmark import Bookmark, Coordinate, DEFAULT_BOOKMARK_NAME
from .place import (
    GeosearchPage,
    GeosearchQuery,
    GeosearchResponse,
    LoadingState,
    NearbyPlace,
    NO_FURTHER_INFORMATION,
)

__all__ = [
    "AuthState",
    "AuthStatus",
    "FailureReason",
    "MAX_FAILED_ATTEMPTS",
    "Bookmark",
    "Coordinate",
    "DEFAULT_BOOKMARK_NAME",
    "GeosearchPage",
    "GeosearchQuery",
    "GeosearchResponse",
    "LoadingState",
    "NearbyPlace",
    "NO_FURTHER_INFORMATION",
]
