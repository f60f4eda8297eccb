"""
Dependency providers for FastAPI routes.
"""

from fastapi import Request

from bucketlist.services.bookmark_service import BookmarkService


def get_bookmark_service(request: Request) -> BookmarkService:
    """The service the application lifespan put on ``app.state``."""
    return request.app.state.bookmark_service


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")
