"""Application configuration settings."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``MCPHUB_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="MCPHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "MCP Hub API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Store
    seed_data: bool = True

    # Listing
    default_limit: int = 10
    max_limit: int = 100
    excerpt_length: int = 200

    # Playground simulation (seconds)
    playground_latency: float = 2.0


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
