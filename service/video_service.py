"""Read-side assembly of video payloads"""
from typing import List

from catalog.store import CatalogStore
from core.models import VideoSnapshot
from engagement.store import EngagementStore
from service.dto import VideoDetailDTO


class VideoQueryService:
    """Composes catalog records with live engagement state. Never mutates."""

    def __init__(self, catalog: CatalogStore, engagement: EngagementStore):
        self.catalog = catalog
        self.engagement = engagement

    def list_videos(self) -> List[VideoSnapshot]:
        """Catalog listing (newest first) with current view/like counters"""
        snapshots = []
        for record in self.catalog.list():
            views, likes = self.engagement.counters(record.id)
            snapshots.append(record.with_counters(views=views, likes=likes))
        return snapshots

    def get_video_detail(self, video_id: str) -> VideoDetailDTO:
        """
        Full public view of one video.

        Raises:
            NotFoundError: Video id not in the catalog
        """
        record = self.catalog.get(video_id)
        engagement = self.engagement.snapshot(video_id)
        return VideoDetailDTO(
            **record.model_dump(),
            views=engagement.view_count,
            likes=engagement.like_count,
            comments=engagement.comments,
        )
