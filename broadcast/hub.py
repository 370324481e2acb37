"""Fan-out publisher for live engagement updates"""
import logging
import threading
import uuid
from typing import Callable, Dict, Protocol

from broadcast.events import BroadcastEvent

logger = logging.getLogger(__name__)

Sink = Callable[[BroadcastEvent], None]


class EventPublisher(Protocol):
    def publish(self, event: BroadcastEvent) -> int:
        ...


class BroadcastHub:
    """
    Registry of subscriber sinks keyed by handle.

    Delivery is best-effort: a sink that raises is logged and skipped, and the
    error never reaches the publisher. There is no backlog, so a subscriber
    only sees events published after it registered.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._sinks: Dict[str, Sink] = {}

    def subscribe(self, sink: Sink) -> str:
        """Register a sink, returning the handle used to unsubscribe it"""
        handle = uuid.uuid4().hex
        with self._lock:
            self._sinks[handle] = sink

        logger.info("Subscriber registered", extra={"subscriber_id": handle})
        return handle

    def unsubscribe(self, handle: str) -> None:
        """Remove a sink; unknown or already-removed handles are ignored"""
        with self._lock:
            removed = self._sinks.pop(handle, None)

        if removed is not None:
            logger.info("Subscriber removed", extra={"subscriber_id": handle})

    def publish(self, event: BroadcastEvent) -> int:
        """
        Hand `event` to every sink registered at the time of the call.

        Returns:
            int: Number of sinks that accepted the event
        """
        with self._lock:
            targets = list(self._sinks.items())

        delivered = 0
        for handle, sink in targets:
            try:
                sink(event)
                delivered += 1
            except Exception as e:
                logger.warning("Event delivery failed", extra={
                    "subscriber_id": handle,
                    "event_type": event.type,
                    "error_code": type(e).__name__,
                })

        logger.debug("Event published", extra={"event_type": event.type})
        return delivered

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._sinks)
