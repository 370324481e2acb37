"""Health service for basic health checks"""
import logging
from datetime import datetime, timezone

from broadcast.hub import BroadcastHub
from catalog.store import CatalogStore
from service.dto import HealthResponseDTO

logger = logging.getLogger(__name__)


def get_health(catalog: CatalogStore, hub: BroadcastHub, version: str) -> HealthResponseDTO:
    """
    Get basic health status.

    Returns:
        HealthResponseDTO: Health check result with catalog and subscriber counts
    """
    logger.info("Health check requested")

    return HealthResponseDTO(
        ok=True,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=version,
        videos=len(catalog),
        subscribers=hub.subscriber_count(),
    )
