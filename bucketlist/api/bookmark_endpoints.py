"""
Saved places endpoints. All of them require an unlocked gate.

Calls that write the bookmark file run in the default executor so the fsync
and rename never stall the event loop.
"""

import asyncio
from uuid import UUID

from fastapi import APIRouter, Depends

from bucketlist.core.dependencies import get_bookmark_service
from bucketlist.core.exceptions import BookmarkNotFoundError
from bucketlist.schemas.base import Envelope, envelope
from bucketlist.schemas.bookmark import (
    BookmarkCreate,
    BookmarkListResponse,
    BookmarkRead,
    BookmarkUpdate,
)
from bucketlist.schemas.edit_session import EditSessionRead, EditSessionSave
from bucketlist.services.bookmark_service import BookmarkService

router = APIRouter(tags=["bookmarks"])


@router.get("/bookmarks", response_model=Envelope)
async def list_bookmarks(service: BookmarkService = Depends(get_bookmark_service)):
    bookmarks = [BookmarkRead.from_bookmark(b) for b in service.bookmarks()]
    return envelope(data=BookmarkListResponse(bookmarks=bookmarks))


@router.post("/bookmarks", response_model=Envelope, status_code=201)
async def add_bookmark(
    payload: BookmarkCreate,
    service: BookmarkService = Depends(get_bookmark_service),
):
    loop = asyncio.get_running_loop()
    bookmark = await loop.run_in_executor(None, service.add_bookmark, payload.coordinate())
    return envelope(data=BookmarkRead.from_bookmark(bookmark))


@router.get("/bookmarks/{bookmark_id}", response_model=Envelope)
async def get_bookmark(
    bookmark_id: UUID,
    service: BookmarkService = Depends(get_bookmark_service),
):
    return envelope(data=BookmarkRead.from_bookmark(service.get_bookmark(bookmark_id)))


@router.put("/bookmarks/{bookmark_id}", response_model=Envelope)
async def update_bookmark(
    bookmark_id: UUID,
    payload: BookmarkUpdate,
    service: BookmarkService = Depends(get_bookmark_service),
):
    """Replace a bookmark; the returned copy carries a new id."""
    loop = asyncio.get_running_loop()
    updated = await loop.run_in_executor(
        None,
        lambda: service.update_bookmark(
            bookmark_id, payload.name, payload.description, payload.coordinate()
        ),
    )
    if updated is None:
        raise BookmarkNotFoundError(bookmark_id)
    return envelope(data=BookmarkRead.from_bookmark(updated))


@router.post("/bookmarks/{bookmark_id}/edit-sessions", response_model=Envelope, status_code=201)
async def open_edit_session(
    bookmark_id: UUID,
    service: BookmarkService = Depends(get_bookmark_service),
):
    """Start editing a bookmark; nearby places load in the background."""
    session = service.open_edit_session(bookmark_id)
    return envelope(data=EditSessionRead.from_session(session))


@router.get("/edit-sessions/{session_id}", response_model=Envelope)
async def get_edit_session(
    session_id: UUID,
    wait: bool = False,
    service: BookmarkService = Depends(get_bookmark_service),
):
    session = service.get_edit_session(session_id)
    if wait:
        await session.wait()
    return envelope(data=EditSessionRead.from_session(session))


@router.post("/edit-sessions/{session_id}/save", response_model=Envelope)
async def save_edit_session(
    session_id: UUID,
    payload: EditSessionSave,
    service: BookmarkService = Depends(get_bookmark_service),
):
    loop = asyncio.get_running_loop()
    updated = await loop.run_in_executor(
        None,
        lambda: service.save_edit_session(session_id, payload.name, payload.description),
    )
    return envelope(data=BookmarkRead.from_bookmark(updated))


@router.delete("/edit-sessions/{session_id}", response_model=Envelope)
async def close_edit_session(
    session_id: UUID,
    service: BookmarkService = Depends(get_bookmark_service),
):
    service.close_edit_session(session_id)
    return envelope(data={"closed": str(session_id)})
