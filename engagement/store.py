"""Per-video view counters, like counters and comment threads"""
import logging
import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Deque, Dict, Optional, Tuple

from broadcast.events import EngagementUpdated
from broadcast.hub import EventPublisher
from core.errors import DomainValidationError, NotFoundError
from core.models import Comment, EngagementSnapshot

logger = logging.getLogger(__name__)

ANONYMOUS_AUTHOR = "Anonymous"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _EngagementState:
    view_count: int = 0
    like_count: int = 0
    # Newest first
    comments: Deque[Comment] = field(default_factory=deque)


class EngagementStore:
    """
    Mutable engagement state keyed by video id.

    Every read-modify-write runs under one lock. View and like updates are
    published while the lock is held so that subscribers see a video's events
    in the order the mutations were applied; publishing only enqueues.
    """

    def __init__(
        self,
        publisher: Optional[EventPublisher] = None,
        *,
        anonymous_author: str = ANONYMOUS_AUTHOR,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._publisher = publisher
        self._anonymous_author = anonymous_author
        self._clock = clock
        self._lock = threading.Lock()
        self._states: Dict[str, _EngagementState] = {}

    def __contains__(self, video_id: str) -> bool:
        return video_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def initialize(self, video_id: str, on_ready: Optional[Callable[[], None]] = None) -> None:
        """
        Create the all-zero state for a newly ingested video.

        `on_ready` runs while the lock is still held, so no view or like on
        the new id can be applied (or published) before it returns. If it
        raises, the state is removed again.
        """
        with self._lock:
            if video_id in self._states:
                raise DomainValidationError(f"Engagement for video {video_id} already exists")
            self._states[video_id] = _EngagementState()
            if on_ready is not None:
                try:
                    on_ready()
                except Exception:
                    del self._states[video_id]
                    raise

    def record_view(self, video_id: str) -> int:
        """Count one view, unconditionally. Returns the new view count."""
        with self._lock:
            state = self._state(video_id)
            state.view_count += 1
            view_count = state.view_count
            self._publish(EngagementUpdated(video_id=video_id, view_count=view_count))

        logger.debug("View recorded", extra={"video_id": video_id})
        return view_count

    def set_like(self, video_id: str, liked: bool) -> int:
        """
        Apply a like (+1) or unlike (-1) to the aggregate counter.

        The counter never drops below zero; unliking at zero is a no-op.
        Likes are not tracked per user, so repeated calls accumulate.

        Returns:
            int: New like count
        """
        with self._lock:
            state = self._state(video_id)
            delta = 1 if liked else -1
            state.like_count = max(0, state.like_count + delta)
            like_count = state.like_count
            self._publish(EngagementUpdated(video_id=video_id, like_count=like_count))

        logger.debug("Like updated", extra={"video_id": video_id})
        return like_count

    def add_comment(self, video_id: str, text: str, author: Optional[str] = None) -> Comment:
        """
        Prepend a comment to the video's thread.

        Raises:
            DomainValidationError: Text is empty after trimming
            NotFoundError: Unknown video id
        """
        text = (text or "").strip()
        if not text:
            raise DomainValidationError("Comment text must not be empty")
        author = (author or "").strip() or self._anonymous_author

        with self._lock:
            state = self._state(video_id)
            comment = Comment(
                id=uuid.uuid4().hex[:16],
                text=text,
                author=author,
                posted_at=self._clock(),
            )
            state.comments.appendleft(comment)

        logger.info("Comment added", extra={"video_id": video_id})
        return comment

    def snapshot(self, video_id: str) -> EngagementSnapshot:
        """Copy of the current counters and comment thread"""
        with self._lock:
            state = self._state(video_id)
            return EngagementSnapshot(
                view_count=state.view_count,
                like_count=state.like_count,
                comments=list(state.comments),
            )

    def counters(self, video_id: str) -> Tuple[int, int]:
        """(views, likes) for one video"""
        with self._lock:
            state = self._state(video_id)
            return state.view_count, state.like_count

    def _state(self, video_id: str) -> _EngagementState:
        state = self._states.get(video_id)
        if state is None:
            raise NotFoundError(f"Video {video_id} not found")
        return state

    def _publish(self, event: EngagementUpdated) -> None:
        if self._publisher is not None:
            self._publisher.publish(event)
