"""Application configuration from environment"""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, overridable via VIDEOTUBE_* environment variables"""
    app_name: str = "VideoTube API"
    version: str = "0.1.0"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Media storage
    media_root: str = "uploads/videos"
    media_url_prefix: str = "/uploads"
    max_upload_bytes: int = 100 * 1024 * 1024
    allowed_extensions: List[str] = Field(
        default_factory=lambda: [".mp4", ".webm", ".ogg", ".mov", ".avi"]
    )

    # Engagement
    anonymous_author: str = "Anonymous"

    # Realtime
    subscriber_queue_size: int = 256

    model_config = SettingsConfigDict(env_prefix="VIDEOTUBE_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
