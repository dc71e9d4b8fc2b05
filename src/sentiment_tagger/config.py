"""Configuration via pydantic-settings (reads from .env or environment variables)."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root = two levels up from this file (src/sentiment_tagger/config.py)
_ROOT = Path(__file__).parent.parent.parent


class ServiceConfig(BaseSettings):
    """HTTP service and logging parameters."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", alias="SERVICE_HOST")
    port: int = Field(default=8000, alias="SERVICE_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


class ScoringConfig(BaseSettings):
    """Sentiment scoring parameters."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # "placeholder" keeps the constant neutral contract; "vader" scores text
    backend: str = Field(default="placeholder", alias="SCORING_BACKEND")
    positive_threshold: float = 0.05
    negative_threshold: float = -0.05
    max_confidence: float = 0.95


class StorageConfig(BaseSettings):
    """Local bookmark storage."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    saved_items_path: Path = Field(
        default=_ROOT / "data" / "saved_items.json",
        alias="SAVED_ITEMS_PATH",
    )


# Singleton instances (import these in application code)
service_config = ServiceConfig()
scoring_config = ScoringConfig()
storage_config = StorageConfig()
