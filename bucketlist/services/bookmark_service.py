"""
Bookmark Service - composition root for the gate, the store and nearby places
"""
import logging
import time
import uuid
from typing import Callable, Dict, List, Optional

from bucketlist.config.settings import AuthSettings, EditSessionSettings, Settings, get_settings
from bucketlist.core.exceptions import BookmarkNotFoundError, EditSessionNotFoundError
from bucketlist.core.preferences import PreferencesStore
from bucketlist.models.auth import AuthState
from bucketlist.models.bookmark import Bookmark, Coordinate
from bucketlist.models.place import LoadingState
from bucketlist.services.auth_gate import AuthGate
from bucketlist.services.biometrics import (
    BiometricCapability,
    DeviceAssertionBiometrics,
    UnavailableBiometrics,
)
from bucketlist.services.bookmark_store import BookmarkStore
from bucketlist.services.edit_session import EditSession
from bucketlist.services.nearby_places_client import NearbyPlacesClient

logger = logging.getLogger(__name__)


class BookmarkService:
    """Bookmark access behind the biometric gate, plus edit sessions"""

    def __init__(
        self,
        store: BookmarkStore,
        gate: AuthGate,
        client: NearbyPlacesClient,
        auth_settings: Optional[AuthSettings] = None,
        session_settings: Optional[EditSessionSettings] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.gate = gate
        self.client = client
        self.auth_settings = auth_settings or AuthSettings()
        self.session_settings = session_settings or EditSessionSettings()
        self._clock = clock
        self._sessions: Dict[uuid.UUID, EditSession] = {}
        self._last_used: Dict[uuid.UUID, float] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        biometrics: Optional[BiometricCapability] = None,
    ) -> "BookmarkService":
        """Build the service with file locations and limits taken from settings."""
        settings = settings or get_settings()
        file_mode = settings.storage.file_mode
        store = BookmarkStore(settings.get_bookmarks_path(), file_mode=file_mode)
        preferences = PreferencesStore(settings.get_preferences_path(), file_mode=file_mode)
        gate = AuthGate(
            biometrics or UnavailableBiometrics(),
            preferences,
            max_attempts=settings.auth.max_attempts,
            lockout_key=settings.auth.lockout_key,
            reason=settings.auth.reason,
        )
        return cls(
            store,
            gate,
            NearbyPlacesClient(settings.geosearch),
            auth_settings=settings.auth,
            session_settings=settings.edit_sessions,
        )

    # Authentication

    @property
    def auth_state(self) -> AuthState:
        return self.gate.state

    async def authenticate(self, biometrics: Optional[BiometricCapability] = None) -> AuthState:
        return await self.gate.authenticate(biometrics)

    def device_biometrics(self, assertion: str) -> DeviceAssertionBiometrics:
        """Capability that verifies ``assertion`` against this service's device secret."""
        return DeviceAssertionBiometrics(
            assertion,
            self.auth_settings.device_secret,
            algorithm=self.auth_settings.assertion_algorithm,
        )

    # Bookmarks

    def bookmarks(self) -> List[Bookmark]:
        self.gate.require_unlocked()
        return self.store.bookmarks

    def get_bookmark(self, bookmark_id: uuid.UUID) -> Bookmark:
        self.gate.require_unlocked()
        bookmark = self.store.get(bookmark_id)
        if bookmark is None:
            raise BookmarkNotFoundError(bookmark_id)
        return bookmark

    def add_bookmark(self, coordinate: Coordinate) -> Bookmark:
        self.gate.require_unlocked()
        return self.store.add(coordinate)

    def update_bookmark(
        self,
        bookmark_id: uuid.UUID,
        name: str,
        description: str,
        coordinate: Optional[Coordinate] = None,
    ) -> Optional[Bookmark]:
        """
        Replace a bookmark and close every edit session opened on it.

        Returns:
            The replacement bookmark, or None if ``bookmark_id`` is not saved
        """
        self.gate.require_unlocked()
        updated = self.store.update(bookmark_id, name, description, coordinate)
        if updated is not None:
            self._close_sessions_for(bookmark_id)
        return updated

    # Edit sessions

    def open_edit_session(self, bookmark_id: uuid.UUID) -> EditSession:
        """
        Start editing a bookmark and begin fetching places near it.

        Must be called from a running event loop. Idle settled sessions are
        released first, then the least recently used ones while the
        registry is full.

        Raises:
            BookmarkNotFoundError: If no bookmark has ``bookmark_id``
        """
        bookmark = self.get_bookmark(bookmark_id)
        self._release_idle_sessions()
        while len(self._sessions) >= self.session_settings.max_open:
            oldest = min(self._sessions.values(), key=lambda s: self._last_used.get(s.id, 0.0))
            logger.info(f"Releasing edit session {oldest.id}: too many open sessions")
            oldest.close()

        session = EditSession(bookmark, self.client, on_close=self._forget_session)
        self._sessions[session.id] = session
        self._last_used[session.id] = self._clock()
        session.start()
        logger.info(f"Opened edit session {session.id} for bookmark {bookmark.id}")
        return session

    def get_edit_session(self, session_id: uuid.UUID) -> EditSession:
        self.gate.require_unlocked()
        self._release_idle_sessions()
        session = self._sessions.get(session_id)
        if session is None:
            raise EditSessionNotFoundError(session_id)
        self._last_used[session_id] = self._clock()
        return session

    @property
    def open_session_count(self) -> int:
        return len(self._sessions)

    def save_edit_session(self, session_id: uuid.UUID, name: str, description: str) -> Bookmark:
        """
        Commit an edit session.

        Raises:
            EditSessionNotFoundError: If the session was closed or released
            BookmarkNotFoundError: If the edited bookmark is no longer saved
        """
        session = self.get_edit_session(session_id)
        session.name = name
        session.description = description
        updated = session.save(self)
        if updated is None:
            raise BookmarkNotFoundError(session.bookmark.id)
        return updated

    def close_edit_session(self, session_id: uuid.UUID) -> None:
        self.get_edit_session(session_id).close()

    def _close_sessions_for(self, bookmark_id: uuid.UUID) -> None:
        for session in list(self._sessions.values()):
            if session.bookmark.id == bookmark_id:
                logger.info(f"Closing edit session {session.id}: bookmark {bookmark_id} was replaced")
                session.close()

    def _release_idle_sessions(self) -> None:
        now = self._clock()
        for session in list(self._sessions.values()):
            if session.state == LoadingState.LOADING:
                continue
            if now - self._last_used.get(session.id, now) >= self.session_settings.idle_seconds:
                logger.info(f"Releasing idle edit session {session.id}")
                session.close()

    def _forget_session(self, session: EditSession) -> None:
        self._sessions.pop(session.id, None)
        self._last_used.pop(session.id, None)

    def close(self) -> None:
        """Cancel every open edit session."""
        for session in list(self._sessions.values()):
            session.close()
        logger.info("Bookmark service closed")
