"""Data Transfer Objects for service layer"""
from typing import List, Optional

from pydantic import BaseModel, Field

from core.models import Comment, VideoSnapshot


class VideoDetailDTO(VideoSnapshot):
    """Video record with live counters and its comment thread (newest first)"""
    comments: List[Comment] = Field(default_factory=list)


class ViewResponseDTO(BaseModel):
    views: int


class LikeRequestDTO(BaseModel):
    """`like=true` adds a like, anything else removes one"""
    like: bool = False


class LikeResponseDTO(BaseModel):
    likes: int


class CommentRequestDTO(BaseModel):
    text: str = ""
    author: Optional[str] = None


class CommentsResponseDTO(BaseModel):
    comments: List[Comment]


class HealthResponseDTO(BaseModel):
    """Service layer DTO for health check responses"""
    ok: bool = True
    timestamp: Optional[str] = None
    version: Optional[str] = None
    videos: int = 0
    subscribers: int = 0
