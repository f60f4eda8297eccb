"""
FastAPI application setup.
"""

from fastapi import FastAPI, Request
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from bucketlist.config.settings import get_settings
from bucketlist.core.error_handlers import setup_error_handlers
from bucketlist.core.logging import configure_logging
from bucketlist.services.bookmark_service import BookmarkService

settings = get_settings()
configure_logging(settings.log_level.value, settings.log_format)

logger = logging.getLogger(__name__)


def create_app(service: Optional[BookmarkService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        service: Prebuilt service to serve; built from settings at startup when omitted

    Returns:
        FastAPI: Configured application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        app.state.bookmark_service = service or BookmarkService.from_settings(settings)
        logger.info("Application startup complete")
        try:
            yield
        finally:
            logger.info("Shutting down application")
            app.state.bookmark_service.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    setup_error_handlers(app)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log requests and responses with timing information."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        logger.info(
            f"Request {request_id} started: {request.method} {request.url.path}",
            extra={'request_id': request_id, 'method': request.method, 'path': request.url.path}
        )

        response = await call_next(request)

        processing_time = (time.time() - start_time) * 1000
        logger.info(
            f"Request {request_id} completed: {response.status_code} ({processing_time:.2f}ms)",
            extra={
                'request_id': request_id,
                'status_code': response.status_code,
                'processing_time_ms': processing_time
            }
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/")
    async def root():
        return {
            "message": settings.app_name,
            "version": settings.app_version,
            "status": "running",
        }

    from bucketlist.api.auth_endpoints import router as auth_router
    from bucketlist.api.bookmark_endpoints import router as bookmark_router
    from bucketlist.api.health_endpoints import router as health_router
    app.include_router(auth_router)
    app.include_router(bookmark_router)
    app.include_router(health_router)

    return app


# Create application instance
app = create_app()
