"""
Shared fixtures: a temporary data directory, scriptable biometrics and a
geosearch transport that never touches the network.
"""
import asyncio
import json
from typing import List, Optional

import httpx
import pytest

from bucketlist.config.settings import GeosearchSettings
from bucketlist.core.preferences import PreferencesStore
from bucketlist.services.auth_gate import AuthGate
from bucketlist.services.bookmark_service import BookmarkService
from bucketlist.services.bookmark_store import BookmarkStore
from bucketlist.services.nearby_places_client import NearbyPlacesClient


class FakeBiometrics:
    """Biometric capability with scripted outcomes."""

    def __init__(self, outcomes: Optional[List[bool]] = None, available: bool = True):
        self.outcomes = list(outcomes or [])
        self.available = available
        self.calls = 0
        self.release: Optional[asyncio.Event] = None

    def can_authenticate(self) -> bool:
        return self.available

    async def evaluate(self, reason: str) -> bool:
        self.calls += 1
        if self.release is not None:
            await self.release.wait()
        return self.outcomes.pop(0) if self.outcomes else False


SAMPLE_PAGES = {
    "batchcomplete": "",
    "query": {
        "pages": {
            "18630": {
                "pageid": 18630,
                "ns": 0,
                "title": "London Eye",
                "index": 2,
                "terms": {"description": ["Lit by 40,000 bulbs"]},
            },
            "4922": {
                "pageid": 4922,
                "ns": 0,
                "title": "Buckingham Palace",
                "index": 1,
                "terms": {"description": []},
            },
            "7701": {
                "pageid": 7701,
                "ns": 0,
                "title": "Admiralty Arch",
                "index": 3,
            },
        }
    },
}


def geosearch_transport(payload=None, status_code: int = 200, raw: Optional[bytes] = None):
    """MockTransport answering every request with the same body."""
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if raw is not None:
            return httpx.Response(status_code, content=raw)
        return httpx.Response(status_code, json=SAMPLE_PAGES if payload is None else payload)

    transport = httpx.MockTransport(handler)
    transport.seen = seen
    return transport


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def bookmarks_path(data_dir):
    return data_dir / "SavedPlaces"


@pytest.fixture
def preferences_path(data_dir):
    return data_dir / "preferences.json"


@pytest.fixture
def store(bookmarks_path):
    return BookmarkStore(bookmarks_path)


@pytest.fixture
def preferences(preferences_path):
    return PreferencesStore(preferences_path)


@pytest.fixture
def biometrics():
    return FakeBiometrics()


@pytest.fixture
def gate(biometrics, preferences):
    return AuthGate(biometrics, preferences)


@pytest.fixture
def nearby_client():
    return NearbyPlacesClient(GeosearchSettings(), transport=geosearch_transport())


@pytest.fixture
def service(store, gate, nearby_client):
    return BookmarkService(store, gate, nearby_client)


def read_saved(path):
    return json.loads(path.read_text())


@pytest.fixture
def fake_biometrics():
    """Factory for extra scripted capabilities."""
    return FakeBiometrics


@pytest.fixture
def make_transport():
    return geosearch_transport


@pytest.fixture
def saved_json():
    return read_saved
