"""
Bookmark Store - owns the saved places and their file on disk
"""
import logging
import threading
import uuid
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from bucketlist.core.storage import atomic_write_bytes
from bucketlist.models.bookmark import Bookmark, Coordinate

logger = logging.getLogger(__name__)

_collection_adapter = TypeAdapter(List[Bookmark])


class BookmarkStore:
    """
    Single owner of the bookmark collection.

    Every mutation runs under one lock, changes the in-memory list and then
    rewrites the whole file atomically. Callers only ever get copies.
    """

    def __init__(self, path: Union[str, Path], file_mode: int = 0o600):
        self.path = Path(path)
        self.file_mode = file_mode
        self._lock = threading.RLock()
        self._bookmarks: List[Bookmark] = self.load()

    def load(self) -> List[Bookmark]:
        """
        Read the bookmark file.

        Returns:
            The saved bookmarks, or an empty list when the file is missing or
            cannot be decoded
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            logger.info(f"No saved places at {self.path}, starting empty")
            return []
        except OSError as e:
            logger.warning(f"Unable to read saved places from {self.path}: {e}")
            return []

        try:
            bookmarks = _collection_adapter.validate_json(data)
        except ValidationError as e:
            logger.warning(
                f"Discarding corrupt saved places file {self.path}",
                extra={"error_count": e.error_count()}
            )
            return []

        logger.info(f"Loaded {len(bookmarks)} saved places")
        return bookmarks

    @property
    def bookmarks(self) -> List[Bookmark]:
        with self._lock:
            return list(self._bookmarks)

    def get(self, bookmark_id: uuid.UUID) -> Optional[Bookmark]:
        with self._lock:
            index = self._index_of(bookmark_id)
            return None if index is None else self._bookmarks[index]

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookmarks)

    def add(self, coordinate: Coordinate) -> Bookmark:
        """
        Save a new place at ``coordinate`` with the default name.

        Args:
            coordinate: Where the user tapped

        Returns:
            The new bookmark
        """
        bookmark = Bookmark.at(coordinate)
        with self._lock:
            self._bookmarks.append(bookmark)
            self.persist()
        logger.info(f"Added bookmark {bookmark.id}")
        return bookmark

    def update(
        self,
        target_id: uuid.UUID,
        name: str,
        description: str,
        coordinate: Optional[Coordinate] = None,
    ) -> Optional[Bookmark]:
        """
        Replace a bookmark, in place, with an edited copy under a new id.

        Args:
            target_id: Id of the bookmark being edited
            name: New display name
            description: New description
            coordinate: New position, or None to keep the current one

        Returns:
            The replacement bookmark, or None if ``target_id`` is not saved
        """
        with self._lock:
            index = self._index_of(target_id)
            if index is None:
                logger.info(f"Ignoring update for unknown bookmark {target_id}")
                return None

            replacement = self._bookmarks[index].revised(name, description, coordinate)
            self._bookmarks[index] = replacement
            self.persist()

        logger.info(f"Replaced bookmark {target_id} with {replacement.id}")
        return replacement

    def persist(self) -> bool:
        """
        Write the whole collection to disk atomically.

        Returns:
            True if the file was written; False if the write failed, in which
            case the in-memory collection stays authoritative
        """
        with self._lock:
            payload = _collection_adapter.dump_json(self._bookmarks)
            try:
                atomic_write_bytes(self.path, payload, mode=self.file_mode)
            except OSError as e:
                logger.error(f"Unable to save data to {self.path}: {e}")
                return False
        return True

    def _index_of(self, bookmark_id: uuid.UUID) -> Optional[int]:
        for index, bookmark in enumerate(self._bookmarks):
            if bookmark.id == bookmark_id:
                return index
        return None
