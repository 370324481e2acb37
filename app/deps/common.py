"""Common dependencies for FastAPI dependency injection"""
import uuid
from datetime import datetime, timezone

from fastapi import Depends, Request
from fastapi.requests import HTTPConnection

from engagement.store import EngagementStore
from service.container import ServiceContainer
from service.upload_service import UploadIngestor
from service.video_service import VideoQueryService


def get_container(connection: HTTPConnection) -> ServiceContainer:
    """
    Process-wide services built by the application factory.

    Takes an HTTPConnection so it resolves for both HTTP and WebSocket routes.
    """
    return connection.app.state.container


def get_engagement_store(container: ServiceContainer = Depends(get_container)) -> EngagementStore:
    return container.engagement


def get_ingestor(container: ServiceContainer = Depends(get_container)) -> UploadIngestor:
    return container.ingestor


def get_video_service(container: ServiceContainer = Depends(get_container)) -> VideoQueryService:
    return container.videos


def get_trace_id(request: Request) -> str:
    """
    Request trace ID; honours an incoming X-Request-ID header.

    Returns:
        str: Unique trace ID
    """
    incoming = request.headers.get("x-request-id")
    if incoming:
        return incoming
    return f"api_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"
