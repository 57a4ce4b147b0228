"""Application settings parsed from environment variables and defaults."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from accord.utils.normalize import as_list

DEFAULT_QUEUE_NAMES = ["default", "scoring", "maintenance"]


class Settings(BaseSettings):
    """Scoring core configuration loaded from environment variables."""

    app_name: str = "Accord Compatibility"
    environment: str = "development"

    database_url: str = "sqlite+aiosqlite:///./accord.db"
    test_database_url: Optional[str] = None

    log_level: str = "INFO"
    redis_url: str = "redis://redis:6379/0"
    worker_queue_names: list[str] | str = Field(default_factory=lambda: DEFAULT_QUEUE_NAMES.copy())

    compatibility_cache_ttl_days: int = 7
    score_store_timeout_seconds: float = 2.0
    prewarm_batch_size: int = 200
    stale_score_prune_interval_hours: int = 24

    @field_validator("worker_queue_names", mode="before")
    @classmethod
    def _split_worker_queue_names(cls, value: str | list[str] | None) -> list[str]:
        """Accept a JSON array, a comma-separated string, or a list."""
        if isinstance(value, str) and not value.strip().startswith("["):
            value = value.split(",")
        return as_list(value) or ["default"]

    @field_validator("compatibility_cache_ttl_days", "prewarm_batch_size")
    @classmethod
    def _require_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


settings = get_settings()
