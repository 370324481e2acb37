"""In-memory video catalog"""
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from core.errors import DomainValidationError, NotFoundError
from core.models import VideoRecord

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CatalogStore:
    """
    Append-only set of video records.

    Records are never mutated or removed once added. Listing sorts a copy
    on every call, so it always reflects the current catalog.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self._lock = threading.Lock()
        self._records: List[VideoRecord] = []
        self._by_id: Dict[str, VideoRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def build_record(
        self,
        title: str,
        description: Optional[str],
        storage_key: str,
    ) -> VideoRecord:
        """
        Validate metadata and construct a record without adding it.

        Raises:
            DomainValidationError: Empty title or storage key
        """
        title = (title or "").strip()
        if not title:
            raise DomainValidationError("Title must not be empty")
        if not storage_key:
            raise DomainValidationError("Storage key must not be empty")

        return VideoRecord(
            id=uuid.uuid4().hex,
            storage_key=storage_key,
            title=title,
            description=(description or "").strip(),
            created_at=self._clock(),
        )

    def add(self, record: VideoRecord) -> VideoRecord:
        """Append a record built by `build_record`"""
        with self._lock:
            if record.id in self._by_id:
                raise DomainValidationError(f"Video {record.id} already exists")
            self._records.append(record)
            self._by_id[record.id] = record

        logger.info("Video added to catalog", extra={"video_id": record.id})
        return record

    def create(self, title: str, description: Optional[str], storage_key: str) -> VideoRecord:
        """Build and append a new record in one step"""
        return self.add(self.build_record(title, description, storage_key))

    def list(self) -> List[VideoRecord]:
        """All records, most recent first (later insert wins on equal timestamps)"""
        with self._lock:
            records = list(reversed(self._records))
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def get(self, video_id: str) -> VideoRecord:
        """
        Point lookup.

        Raises:
            NotFoundError: No record with that id
        """
        record = self._by_id.get(video_id)
        if record is None:
            raise NotFoundError(f"Video {video_id} not found")
        return record

    def contains(self, video_id: str) -> bool:
        return video_id in self._by_id
