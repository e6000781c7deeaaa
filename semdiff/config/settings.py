"""
Engine configuration via Pydantic Settings.

All values are sourced from ``SEMDIFF_``-prefixed environment variables or
an .env file. Every value only sets a default: the public diff functions
accept explicit overrides.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(StrEnum):
    """Structured log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """
    Centralised, type-validated engine configuration.

    Reads from environment variables with an optional .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEMDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Diff ───────────────────────────────────────────────────────────── #
    default_context_lines: int = Field(
        default=3,
        ge=0,
        description="Unchanged lines kept around each change when the caller passes none",
    )
    similarity_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum similarity for a removed/added line pair to count as a modification",
    )
    large_content_threshold: int = Field(
        default=50_000,
        ge=1,
        description="Character count above which a file diff is flagged as large",
    )

    # ── Logging ────────────────────────────────────────────────────────── #
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Minimum log level")
    log_json: bool = Field(default=True, description="Emit logs as JSON (False for dev console)")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached Settings singleton."""
    return Settings()
