"""
Test configuration and fixtures for ClipStream.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List

import pytest
from fastapi.testclient import TestClient

from clipstream.main import app
from clipstream.models.clip import Clip
from clipstream.services.auth import create_access_token
from clipstream.services.clip_store import ClipStore
from clipstream.services.feed import FeedAssembler, get_feed_assembler
from clipstream.services.metadata_extractor import ProviderOptions, VideoMetadataExtractor

VIDEO_ID = "dQw4w9WgXcQ"
VIDEO_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeProvider:
    """Stands in for yt-dlp; records every call"""

    def __init__(self, info: Dict = None):
        self.info = info or {"id": VIDEO_ID, "title": "Never Gonna Give You Up", "duration": 213, "thumbnail": None}
        self.calls: List[tuple] = []

    def __call__(self, url: str, options: ProviderOptions) -> Dict:
        self.calls.append((url, options))
        return dict(self.info)


@pytest.fixture
def store(tmp_path) -> ClipStore:
    return ClipStore(str(tmp_path / "clipstream-test.db"))


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def extractor(provider) -> VideoMetadataExtractor:
    return VideoMetadataExtractor(provider=provider, timeout_seconds=5, max_retries=0)


@pytest.fixture
def feed(store, extractor) -> FeedAssembler:
    return FeedAssembler(store, extractor=extractor)


@pytest.fixture
def clip_factory(store) -> Callable:
    """Insert clips with strictly increasing creation times"""
    counter = {"n": 0}

    async def make(user_id: str = "owner-1", title: str = None) -> Clip:
        counter["n"] += 1
        clip = Clip(
            user_id=user_id,
            title=title or f"Clip {counter['n']}",
            youtube_url=VIDEO_URL,
            youtube_video_id=VIDEO_ID,
            duration="3:33",
            created_at=BASE_TIME + timedelta(seconds=counter["n"]),
        )
        await store.save_clip(clip)
        return clip

    return make


@pytest.fixture
def auth_headers() -> Callable[[str], Dict[str, str]]:
    def headers(user_id: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return headers


@pytest.fixture
def client(feed):
    """HTTP client wired to a temp-dir store and the fake provider"""
    app.dependency_overrides[get_feed_assembler] = lambda: feed
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
