"""Composition root for the process-wide stores and services"""
from dataclasses import dataclass
from pathlib import Path

from broadcast.hub import BroadcastHub
from catalog.store import CatalogStore
from core.config import Settings
from engagement.store import EngagementStore
from service.media_storage import MediaStorage
from service.upload_service import UploadIngestor
from service.video_service import VideoQueryService


@dataclass
class ServiceContainer:
    settings: Settings
    hub: BroadcastHub
    catalog: CatalogStore
    engagement: EngagementStore
    media: MediaStorage
    ingestor: UploadIngestor
    videos: VideoQueryService


def build_container(settings: Settings) -> ServiceContainer:
    """Wire one fresh, empty set of stores and services"""
    hub = BroadcastHub()
    catalog = CatalogStore()
    engagement = EngagementStore(hub, anonymous_author=settings.anonymous_author)
    media = MediaStorage(
        Path(settings.media_root),
        max_bytes=settings.max_upload_bytes,
        allowed_extensions=settings.allowed_extensions,
    )
    return ServiceContainer(
        settings=settings,
        hub=hub,
        catalog=catalog,
        engagement=engagement,
        media=media,
        ingestor=UploadIngestor(catalog, engagement, hub, media),
        videos=VideoQueryService(catalog, engagement),
    )
