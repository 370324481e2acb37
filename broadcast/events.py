"""Domain events pushed to live subscribers"""
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from core.models import VideoSnapshot


class BroadcastEvent(BaseModel):
    """Base for all broadcast events; `type` is the wire discriminator"""
    model_config = ConfigDict(frozen=True)

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready payload; unset optional fields are left out"""
        return self.model_dump(mode="json", exclude_none=True)


class VideoCreated(BroadcastEvent):
    type: Literal["video_created"] = "video_created"
    record: VideoSnapshot


class EngagementUpdated(BroadcastEvent):
    """
    Counter change for one video.

    Carries only the counters that changed; subscribers must treat a missing
    field as unchanged, not as zero.
    """
    type: Literal["engagement_updated"] = "engagement_updated"
    video_id: str
    view_count: Optional[int] = Field(default=None, ge=0)
    like_count: Optional[int] = Field(default=None, ge=0)


Event = Union[VideoCreated, EngagementUpdated]
