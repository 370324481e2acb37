import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.health import router as health_router
from app.api.realtime import router as realtime_router
from app.api.videos import router as videos_router
from core.config import Settings, get_settings
from core.logging import setup_json_logging
from service.container import build_container

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with a fresh, empty set of stores"""
    settings = settings or get_settings()
    container = build_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container.media.ensure_root()
        logger.info("VideoTube API starting", extra={"trace_id": "system_init"})
        yield
        logger.info("VideoTube API stopped", extra={"trace_id": "system_shutdown"})

    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)
    app.state.container = container

    # Include routers
    app.include_router(health_router)  # Health at root level
    app.include_router(videos_router, prefix="/api/v1")
    app.include_router(realtime_router)
    app.mount(
        settings.media_url_prefix,
        StaticFiles(directory=settings.media_root, check_dir=False),
        name="media",
    )
    return app


# Setup logging
setup_json_logging(get_settings().log_level)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)
