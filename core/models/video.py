from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VideoRecord(BaseModel):
    """Catalog entry for an uploaded video"""
    model_config = ConfigDict(frozen=True)

    id: str
    storage_key: str = Field(..., min_length=1, description="Name of the stored media blob")
    title: str = Field(..., min_length=1)
    description: str = ""
    created_at: datetime

    def with_counters(self, views: int, likes: int) -> "VideoSnapshot":
        """Public view of the record carrying the current engagement counters"""
        return VideoSnapshot(**{**self.model_dump(), "views": views, "likes": likes})


class VideoSnapshot(VideoRecord):
    """Video record plus live view/like counters at the moment of the read"""
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
