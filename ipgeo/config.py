from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Lookup settings, read from IPGEO_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="IPGEO_",
        env_file=".env",
        extra="ignore",
    )

    cache_path: Path = Field(default_factory=lambda: Path.home() / ".cache" / "ipgeo" / "lookup.json")
    # Public IPs change rarely, but they do change.
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    http_timeout_seconds: float = Field(default=5.0, gt=0)
    default_retry_budget: int | None = Field(default=None, ge=0)

    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)
    reload: bool = False


@lru_cache
def get_settings() -> Settings:
    """Create and cache application settings."""
    return Settings()
