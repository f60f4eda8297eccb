"""Biometric unlock endpoints."""

from fastapi import APIRouter, Depends

from bucketlist.core.dependencies import get_bookmark_service
from bucketlist.schemas.auth import AuthStateRead, UnlockRequest
from bucketlist.schemas.base import Envelope, envelope
from bucketlist.services.bookmark_service import BookmarkService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/state", response_model=Envelope)
async def get_auth_state(service: BookmarkService = Depends(get_bookmark_service)):
    return envelope(data=AuthStateRead.from_state(service.auth_state))


@router.post("/unlock", response_model=Envelope)
async def unlock(
    payload: UnlockRequest,
    service: BookmarkService = Depends(get_bookmark_service),
):
    """
    Try to unlock the saved places.

    With an ``assertion`` the device's signed biometric result is verified
    against the configured secret; without one the service's own capability
    is used. Blocked-out and already-unlocked gates are returned unchanged.
    """
    biometrics = None
    if payload.assertion is not None:
        biometrics = service.device_biometrics(payload.assertion)
    state = await service.authenticate(biometrics)
    return envelope(data=AuthStateRead.from_state(state))
