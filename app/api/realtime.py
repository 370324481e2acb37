"""WebSocket transport for live engagement events"""
import asyncio
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.deps.common import get_container
from broadcast.sinks import AsyncQueueSink
from service.container import ServiceContainer

logger = logging.getLogger(__name__)
router = APIRouter(tags=["realtime"])


async def _pump(websocket: WebSocket, sink: AsyncQueueSink) -> None:
    """Forward queued events to the client, one JSON frame each"""
    try:
        while True:
            event = await sink.get()
            await websocket.send_json(event.to_wire())
    except (WebSocketDisconnect, RuntimeError) as e:
        # Socket closed under us; the receive loop handles unsubscribing
        logger.info("Realtime send stopped", extra={"error_code": type(e).__name__})


@router.websocket("/ws/videos")
async def video_events(
    websocket: WebSocket,
    container: ServiceContainer = Depends(get_container),
):
    """Stream video_created and engagement_updated events until the client leaves"""
    hub = container.hub
    sink = AsyncQueueSink(
        asyncio.get_running_loop(),
        maxsize=container.settings.subscriber_queue_size,
    )
    # Subscribe before accepting so nothing published after the handshake is missed
    handle = hub.subscribe(sink)
    pump = None
    try:
        await websocket.accept()
        pump = asyncio.create_task(_pump(websocket, sink))
        logger.info("Realtime client connected", extra={"subscriber_id": handle})

        # Client frames carry nothing; reading only detects disconnects
        while True:
            await websocket.receive_text()

    except WebSocketDisconnect:
        logger.info("Realtime client disconnected", extra={"subscriber_id": handle})
    finally:
        hub.unsubscribe(handle)
        if pump is not None:
            pump.cancel()
