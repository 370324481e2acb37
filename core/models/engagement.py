from typing import List

from pydantic import BaseModel, Field

from .comment import Comment


class EngagementSnapshot(BaseModel):
    """Point-in-time copy of a video's counters and comment thread (newest first)"""
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    comments: List[Comment] = Field(default_factory=list)
