"""Runtime configuration defaults for the API client and local session storage."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

API_BASE_URL = "http://localhost:5000"
DB_PATH = "data/kadai.db"
LOG_PATH = "/tmp/kadai-debug.log"
LOG_LEVEL = "INFO"

# Seller dashboard order refresh cadence.
ORDER_POLL_SECONDS = 8.0


class Settings(BaseSettings):
    """Settings read from ``KADAI_*`` environment variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="KADAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = Field(default=API_BASE_URL, description="Base URL of the ordering API")
    db_path: str = Field(default=DB_PATH, description="SQLite file holding the session token")
    log_path: str = Field(default=LOG_PATH, description="Debug log file")
    log_level: str = Field(default=LOG_LEVEL, description="Logging level name")
    order_poll_seconds: float = Field(default=ORDER_POLL_SECONDS, gt=0)


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
