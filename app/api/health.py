"""Health check API endpoints"""
from fastapi import APIRouter, Depends

from app.deps.common import get_container
from service.container import ServiceContainer
from service.health_service import get_health
from service.dto import HealthResponseDTO

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponseDTO)
def health_check(container: ServiceContainer = Depends(get_container)) -> HealthResponseDTO:
    """
    Basic health check endpoint.

    Returns:
        HealthResponseDTO: Health status with timestamp and live counts
    """
    return get_health(container.catalog, container.hub, container.settings.version)
