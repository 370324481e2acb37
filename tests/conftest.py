"""Common test fixtures for all test modules"""
import io

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from broadcast.hub import BroadcastHub
from catalog.store import CatalogStore
from core.config import Settings
from engagement.store import EngagementStore
from service.media_storage import MediaStorage
from service.upload_service import UploadIngestor
from service.video_service import VideoQueryService


@pytest.fixture
def hub():
    return BroadcastHub()


@pytest.fixture
def events(hub):
    """Every event published on `hub`, in order"""
    received = []
    hub.subscribe(received.append)
    return received


@pytest.fixture
def catalog():
    return CatalogStore()


@pytest.fixture
def engagement(hub):
    return EngagementStore(hub)


@pytest.fixture
def media(tmp_path):
    return MediaStorage(
        tmp_path / "videos",
        max_bytes=1024,
        allowed_extensions=[".mp4", ".webm", ".ogg", ".mov", ".avi"],
    )


@pytest.fixture
def stored_key(media):
    """Write a small media file and return its storage key"""
    def _store(content: bytes = b"fake-video-binary", filename: str = "clip.mp4") -> str:
        return media.save(io.BytesIO(content), filename)
    return _store


@pytest.fixture
def ingestor(catalog, engagement, hub, media):
    return UploadIngestor(catalog, engagement, hub, media)


@pytest.fixture
def videos(catalog, engagement):
    return VideoQueryService(catalog, engagement)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        media_root=str(tmp_path / "uploads"),
        max_upload_bytes=64 * 1024,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    """API client over a fresh application with empty stores"""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
