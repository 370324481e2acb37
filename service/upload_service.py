"""Upload ingestion: registers new videos with the catalog and engagement stores"""
import logging
import threading
import time
from typing import BinaryIO, Optional

from broadcast.events import VideoCreated
from broadcast.hub import EventPublisher
from catalog.store import CatalogStore
from core.errors import DomainValidationError
from core.models import VideoRecord
from engagement.store import EngagementStore
from service.media_storage import MediaStorage

logger = logging.getLogger(__name__)


class UploadIngestor:
    """
    Turns stored uploads into catalog entries.

    A video becomes visible in the catalog only after its engagement state
    exists, and `VideoCreated` is published only after both are in place.
    A failed ingest leaves both stores untouched.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        engagement: EngagementStore,
        publisher: EventPublisher,
        media: MediaStorage,
    ):
        self.catalog = catalog
        self.engagement = engagement
        self.publisher = publisher
        self.media = media
        self._lock = threading.Lock()

    def ingest(
        self,
        title: str,
        description: Optional[str],
        storage_key: str,
        *,
        trace_id: str = "",
    ) -> VideoRecord:
        """
        Register an already-stored media file as a new video.

        Raises:
            DomainValidationError: Empty title or unknown storage key
        """
        if not self.media.exists(storage_key):
            raise DomainValidationError(f"No stored media for key '{storage_key}'")

        record = self.catalog.build_record(title, description, storage_key)

        def register():
            self.catalog.add(record)
            self.publisher.publish(VideoCreated(record=record.with_counters(views=0, likes=0)))

        # Engagement mutations on the new id wait until VideoCreated is out
        with self._lock:
            self.engagement.initialize(record.id, on_ready=register)

        logger.info("Video ingested", extra={
            "trace_id": trace_id,
            "video_id": record.id,
            "storage_key": storage_key,
        })
        return record

    def upload(
        self,
        stream: BinaryIO,
        filename: str,
        title: str,
        description: Optional[str],
        *,
        trace_id: str = "",
    ) -> VideoRecord:
        """
        Store an uploaded byte stream and ingest it.

        The stored file is removed again if ingestion fails.
        """
        start_time = time.time()

        storage_key = self.media.save(stream, filename)
        try:
            record = self.ingest(title, description, storage_key, trace_id=trace_id)
        except Exception:
            self.media.discard(storage_key)
            raise

        logger.info("Upload completed", extra={
            "trace_id": trace_id,
            "video_id": record.id,
            "latency_ms": int((time.time() - start_time) * 1000),
        })
        return record
