"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Remote trip API
    api_base_url: str = "http://localhost:8000"
    api_timeout_seconds: float = 10.0

    # Local visited-state storage
    local_state_url: str | None = None
    redis_url: str | None = None
    status_key_prefix: str = "trip-state"

    # Fetched-trip cache (entries, 0 disables)
    trip_cache_size: int = 32


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
