"""Core domain models"""
from .video import VideoRecord, VideoSnapshot
from .comment import Comment
from .engagement import EngagementSnapshot

__all__ = ["VideoRecord", "VideoSnapshot", "Comment", "EngagementSnapshot"]
