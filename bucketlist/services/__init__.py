"""
Services package for the BucketList backend.
"""

from .auth_gate import AuthGate
from .biometrics import (
    BiometricCapability,
    DeviceAssertionBiometrics,
    UnavailableBiometrics,
    issue_device_assertion,
)
from .bookmark_service import BookmarkService
from .bookmark_store import BookmarkStore
from .edit_session import EditSession
from .nearby_places_client import NearbyPlacesClient

__all__ = [
    "AuthGate",
    "BiometricCapability",
    "DeviceAssertionBiometrics",
    "UnavailableBiometrics",
    "issue_device_assertion",
    "BookmarkService",
    "BookmarkStore",
    "EditSession",
    "NearbyPlacesClient",
]
