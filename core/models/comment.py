from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Comment(BaseModel):
    """A single comment on a video, immutable once posted"""
    model_config = ConfigDict(frozen=True)

    id: str
    text: str = Field(..., min_length=1)
    author: str
    posted_at: datetime
