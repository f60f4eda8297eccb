"""Health check endpoint."""

import time

from fastapi import APIRouter, Depends

from bucketlist.config.settings import get_settings
from bucketlist.core.dependencies import get_bookmark_service, get_request_id
from bucketlist.schemas.base import Envelope, envelope
from bucketlist.services.bookmark_service import BookmarkService

router = APIRouter(tags=["health"])

# Application start time for uptime calculation
_app_start_time = time.time()


@router.get("/health", response_model=Envelope)
async def health_check(
    service: BookmarkService = Depends(get_bookmark_service),
    request_id: str = Depends(get_request_id),
):
    settings = get_settings()
    return envelope(data={
        "status": "healthy",
        "version": settings.app_version,
        "auth_status": service.auth_state.status.value,
        "uptime_seconds": round(time.time() - _app_start_time, 1),
        "request_id": request_id,
    })
