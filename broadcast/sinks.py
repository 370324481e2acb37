"""Delivery sinks bridging the hub to asyncio-based connections"""
import asyncio
import logging

from broadcast.events import BroadcastEvent

logger = logging.getLogger(__name__)


class AsyncQueueSink:
    """
    Sink that enqueues events onto a bounded asyncio.Queue owned by `loop`.

    Safe to call from any thread. The put is scheduled on the loop, so the
    publisher never waits for the connection. When the queue is full the
    event is dropped for this subscriber only.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, maxsize: int = 256):
        self.loop = loop
        self.queue: "asyncio.Queue[BroadcastEvent]" = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    def __call__(self, event: BroadcastEvent) -> None:
        # Raises RuntimeError once the loop is closed; the hub logs and skips it
        self.loop.call_soon_threadsafe(self._offer, event)

    def _offer(self, event: BroadcastEvent) -> None:
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning("Subscriber queue full, event dropped", extra={
                "event_type": event.type,
            })

    async def get(self) -> BroadcastEvent:
        return await self.queue.get()
