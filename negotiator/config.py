"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central settings – values come from .env or environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    llm_timeout_seconds: Optional[float] = None

    # Token budgets: a full pack needs far more room than one manager reply
    content_max_tokens: int = 2000
    roleplay_max_tokens: int = 200
    content_temperature: float = 0.7
    roleplay_temperature: float = 0.8

    # Hosted identity provider
    auth_base_url: str = ""
    auth_api_key: str = ""

    # Role-play
    default_confidence: int = 5
    session_version_check: bool = False
    fallback_seed: Optional[int] = None

    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000"

    # Paths
    data_dir: str = "data"
    log_dir: str = "logs"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


def setup_logging() -> None:
    """Configure root logger based on settings."""
    settings = get_settings()
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
