"""
Edit session - one bookmark being edited plus its nearby-places lookup.

The lookup result is written at most once (``loading`` to ``loaded`` or
``failed``). Closing the session cancels the lookup and drops any late result.
"""

import asyncio
import logging
import uuid
from typing import TYPE_CHECKING, Callable, List, Optional

from bucketlist.core.exceptions import NearbyPlacesError
from bucketlist.models.bookmark import Bookmark
from bucketlist.models.place import LoadingState, NearbyPlace
from bucketlist.services.nearby_places_client import NearbyPlacesClient

if TYPE_CHECKING:
    from bucketlist.services.bookmark_service import BookmarkService

logger = logging.getLogger(__name__)


class EditSession:
    def __init__(
        self,
        bookmark: Bookmark,
        client: NearbyPlacesClient,
        on_close: Optional[Callable[["EditSession"], None]] = None,
    ):
        self.id = uuid.uuid4()
        self.bookmark = bookmark
        self.name = bookmark.name
        self.description = bookmark.description
        self.client = client
        self._on_close = on_close

        self._state = LoadingState.LOADING
        self._places: List[NearbyPlace] = []
        self._error: Optional[str] = None
        self._alive = True
        self._task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def state(self) -> LoadingState:
        return self._state

    @property
    def places(self) -> List[NearbyPlace]:
        return list(self._places)

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_alive(self) -> bool:
        return self._alive

    def start(self) -> asyncio.Task:
        """Schedule the nearby-places lookup on the running loop."""
        if self._task is None:
            self._loop = asyncio.get_running_loop()
            self._task = asyncio.create_task(self._fetch(), name=f"nearby-{self.id}")
        return self._task

    async def wait(self) -> LoadingState:
        """Wait for the lookup to settle and return the resulting state."""
        task = self.start()
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
        return self._state

    async def _fetch(self) -> None:
        try:
            places = await self.client.fetch_nearby(self.bookmark.coordinate)
        except NearbyPlacesError as e:
            self._settle(LoadingState.FAILED, error=e.message)
        except Exception as e:
            logger.exception(f"Unexpected error fetching nearby places for session {self.id}: {e}")
            self._settle(LoadingState.FAILED, error="Unexpected error fetching nearby places")
        else:
            self._settle(LoadingState.LOADED, places=places)

    def _settle(
        self,
        state: LoadingState,
        places: Optional[List[NearbyPlace]] = None,
        error: Optional[str] = None,
    ) -> None:
        if not self._alive:
            logger.debug(f"Dropping late nearby-places result for closed session {self.id}")
            return
        if self._state != LoadingState.LOADING:
            return
        self._places = places or []
        self._error = error
        self._state = state
        logger.info(f"Edit session {self.id} nearby places {state.value}")

    def close(self) -> None:
        """End the session; a pending lookup is cancelled and its result discarded."""
        if not self._alive:
            return
        self._alive = False
        if self._task is not None and not self._task.done():
            self._cancel_task()
        if self._on_close is not None:
            self._on_close(self)

    def _cancel_task(self) -> None:
        # close() may run on a worker thread when a store write closes sessions
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._task.cancel()
        else:
            self._loop.call_soon_threadsafe(self._task.cancel)

    def save(self, service: "BookmarkService") -> Optional[Bookmark]:
        """
        Commit the edited name and description and close the session.

        Returns:
            The replacement bookmark, or None if the original was no longer saved
        """
        updated = service.update_bookmark(self.bookmark.id, self.name, self.description)
        self.close()
        return updated
