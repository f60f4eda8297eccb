"""
Unit tests for the bookmark store: load fallback, add/update and atomic persistence
"""
import os
import stat
import uuid

import pytest

from bucketlist.models.bookmark import Bookmark, Coordinate, DEFAULT_BOOKMARK_NAME
from bucketlist.services.bookmark_store import BookmarkStore

LONDON = Coordinate(latitude=51.5, longitude=-0.14)
PARIS = Coordinate(latitude=48.8566, longitude=2.3522)


def test_missing_file_loads_empty(store):
    assert store.bookmarks == []
    assert len(store) == 0


def test_corrupt_file_loads_empty(bookmarks_path):
    bookmarks_path.parent.mkdir(parents=True)
    bookmarks_path.write_bytes(b'[{"id": "not-a-uuid", "name": 3')
    assert BookmarkStore(bookmarks_path).bookmarks == []


def test_wrong_shape_loads_empty(bookmarks_path):
    bookmarks_path.parent.mkdir(parents=True)
    bookmarks_path.write_text('{"name": "not a list"}')
    assert BookmarkStore(bookmarks_path).load() == []


def test_add_to_empty_store(store, bookmarks_path, saved_json):
    """Empty store + add((51.5, -0.14)) gives one default-named bookmark on disk"""
    bookmark = store.add(LONDON)

    assert store.bookmarks == [bookmark]
    assert bookmark.name == DEFAULT_BOOKMARK_NAME == "New location"
    assert bookmark.description == ""
    assert (bookmark.latitude, bookmark.longitude) == (51.5, -0.14)

    saved = saved_json(bookmarks_path)
    assert saved == [{
        "id": str(bookmark.id),
        "name": "New location",
        "description": "",
        "latitude": 51.5,
        "longitude": -0.14,
    }]

    reloaded = BookmarkStore(bookmarks_path).bookmarks
    assert reloaded == [bookmark]
    assert reloaded[0].model_dump() == bookmark.model_dump()


def test_add_appends_in_order(store):
    first = store.add(LONDON)
    second = store.add(PARIS)
    assert [b.id for b in store.bookmarks] == [first.id, second.id]
    assert first.id != second.id


def test_update_mints_new_id_at_same_index(store):
    first = store.add(LONDON)
    second = store.add(PARIS)
    third = store.add(LONDON)

    updated = store.update(second.id, "Eiffel Tower", "Iron lattice")

    assert updated is not None
    assert updated.id != second.id
    assert store.bookmarks[1] == updated
    assert [b.id for b in store.bookmarks] == [first.id, updated.id, third.id]
    assert updated.name == "Eiffel Tower"
    assert updated.description == "Iron lattice"
    # coordinate carried over
    assert (updated.latitude, updated.longitude) == (PARIS.latitude, PARIS.longitude)
    assert store.get(second.id) is None


def test_update_with_new_coordinate(store):
    bookmark = store.add(LONDON)
    updated = store.update(bookmark.id, "Moved", "", coordinate=PARIS)
    assert updated.coordinate == PARIS


def test_update_unknown_id_is_noop(store, bookmarks_path):
    store.add(LONDON)
    before = store.bookmarks
    file_before = bookmarks_path.read_bytes()

    assert store.update(uuid.uuid4(), "Ghost", "nothing") is None

    assert store.bookmarks == before
    assert [b.model_dump() for b in store.bookmarks] == [b.model_dump() for b in before]
    assert bookmarks_path.read_bytes() == file_before


def test_stale_selection_after_edit_is_noop(store):
    bookmark = store.add(LONDON)
    store.update(bookmark.id, "Edited", "")
    assert store.update(bookmark.id, "Edited again", "") is None
    assert [b.name for b in store.bookmarks] == ["Edited"]


def test_mixed_operations_round_trip(store, bookmarks_path):
    a = store.add(LONDON)
    b = store.add(PARIS)
    a2 = store.update(a.id, "Home", "Start here")
    store.add(Coordinate(latitude=-33.86, longitude=151.21))
    store.update(b.id, "Paris", "")
    store.update(a2.id, "Home", "Still here", coordinate=Coordinate(latitude=0, longitude=0))

    reloaded = BookmarkStore(bookmarks_path).bookmarks
    assert [x.model_dump() for x in reloaded] == [x.model_dump() for x in store.bookmarks]


def test_bookmarks_returns_copy(store):
    store.add(LONDON)
    snapshot = store.bookmarks
    snapshot.clear()
    assert len(store) == 1


def test_persist_failure_keeps_memory(store, bookmarks_path, monkeypatch):
    import bucketlist.services.bookmark_store as module

    def broken_write(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(module, "atomic_write_bytes", broken_write)

    bookmark = store.add(LONDON)

    assert store.bookmarks == [bookmark]
    assert store.persist() is False
    assert not bookmarks_path.exists()


def test_failed_write_leaves_previous_file_intact(store, bookmarks_path, monkeypatch):
    store.add(LONDON)
    original = bookmarks_path.read_bytes()

    def failing_replace(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr(os, "replace", failing_replace)
    store.add(PARIS)

    assert bookmarks_path.read_bytes() == original
    leftovers = [p for p in bookmarks_path.parent.iterdir() if p.name != bookmarks_path.name]
    assert leftovers == []
    assert len(store) == 2


@pytest.mark.skipif(os.name != "posix", reason="POSIX permissions only")
def test_saved_file_is_owner_only(store, bookmarks_path):
    store.add(LONDON)
    mode = stat.S_IMODE(bookmarks_path.stat().st_mode)
    assert mode == 0o600


def test_bookmark_equality_is_by_id():
    a = Bookmark(name="Same", latitude=1, longitude=2)
    b = Bookmark(name="Same", latitude=1, longitude=2)
    assert a != b
    assert a == a.model_copy(update={"name": "Renamed"})
    assert len({a, b}) == 2


def test_bookmark_rejects_out_of_range_coordinates():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        Bookmark(latitude=91, longitude=0)
    with pytest.raises(ValidationError):
        Coordinate(latitude=0, longitude=-180.5)
