"""Application configuration settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./taskmantra.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key used to verify (and in development, sign) JWT tokens",
        min_length=1,
    )
    access_token_algorithm: str = Field(
        default="HS256", description="Algorithm used for JWT tokens"
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC", description="IANA name or UTC offset used for timestamps"
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    notifications_default_page_size: int = Field(default=10, gt=0)
    notifications_max_page_size: int = Field(default=100, gt=0)
    sse_heartbeat_seconds: float = Field(
        default=15.0,
        description="Seconds of silence after which the stream emits a heartbeat",
        gt=0,
    )
    sse_queue_size: int = Field(
        default=100,
        description="Pending events buffered per open stream before deliveries are dropped",
        gt=0,
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""

    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


__all__ = ["Settings", "configure_logging", "get_settings", "reset_settings_cache"]
