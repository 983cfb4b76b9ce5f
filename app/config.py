# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   print(get_settings().MONGODB_URI)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Every value has a default. A value that is present but would make startup
# unsafe (a non-numeric BIND_PORT) raises a ValidationError; the other
# unparsable values fall back to their defaults.
# =============================================================================

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_LOG_LEVEL = "debug"
DEFAULT_MONGODB_TIMEOUT_SECS = 5
DEFAULT_REDIS_TIMEOUT_SECS = 5

LOG_LEVELS = {"critical", "error", "warning", "info", "debug"}

TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Built once at process start and never mutated afterwards; every
    component receives the same read-only instance.
    """

    # -------------------------------------------------------------------------
    # Server Bind
    # -------------------------------------------------------------------------

    BIND_ADDR: str = Field(
        default="0.0.0.0",
        description="Address the HTTP server listens on"
    )

    BIND_PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the HTTP server listens on (malformed values are fatal)"
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    # RUST_LOG is accepted for compatibility with existing deployments

    LOG_LEVEL: str = Field(
        default=DEFAULT_LOG_LEVEL,
        validation_alias=AliasChoices("LOG_LEVEL", "RUST_LOG"),
        description="Root log level (critical, error, warning, info, debug)"
    )

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------

    MONGODB_URI: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )

    MONGODB_DATABASE: str = Field(
        default="template",
        description="Database holding the application collections"
    )

    MONGODB_TIMEOUT_SECS: int = Field(
        default=DEFAULT_MONGODB_TIMEOUT_SECS,
        description="Server selection / connect timeout in seconds"
    )

    # -------------------------------------------------------------------------
    # Redis Configuration
    # -------------------------------------------------------------------------

    REDIS_URI: str = Field(
        default="redis://localhost:6379",
        description="Redis connection URL for the page cache"
    )

    REDIS_TIMEOUT_SECS: int = Field(
        default=DEFAULT_REDIS_TIMEOUT_SECS,
        description="Socket timeout for Redis commands in seconds"
    )

    REDIS_ENABLED: bool = Field(
        default=True,
        description="Connect to Redis at startup (the cache is optional)"
    )

    # -------------------------------------------------------------------------
    # Server-side Rendering
    # -------------------------------------------------------------------------

    RENDER_ENABLED: bool = Field(
        default=True,
        description="Register HTML routes and static assets (false = JSON-only mode)"
    )

    TEMPLATES_DIR: Path = Field(
        default_factory=lambda: Path.cwd() / "templates",
        description="Directory containing Jinja2 templates"
    )

    ASSETS_DIR: Path = Field(
        default_factory=lambda: Path.cwd() / "assets",
        description="Directory served as static assets"
    )

    ASSETS_PATH: str = Field(
        default="/assets",
        description="URL prefix static assets are served under"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Empty variables behave as if they were not set
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # -------------------------------------------------------------------------
    # Lenient Parsing
    # -------------------------------------------------------------------------

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        """
        Accept env_logger style filters such as "info" or "warn".

        Anything unrecognised falls back to the default level.
        """
        level = str(value).strip().lower()
        if level == "warn":
            level = "warning"
        if level not in LOG_LEVELS:
            return DEFAULT_LOG_LEVEL
        return level

    @field_validator("MONGODB_TIMEOUT_SECS", mode="before")
    @classmethod
    def _parse_mongodb_timeout(cls, value: object) -> int:
        return _positive_int_or(value, DEFAULT_MONGODB_TIMEOUT_SECS)

    @field_validator("REDIS_TIMEOUT_SECS", mode="before")
    @classmethod
    def _parse_redis_timeout(cls, value: object) -> int:
        return _positive_int_or(value, DEFAULT_REDIS_TIMEOUT_SECS)

    @field_validator("REDIS_ENABLED", "RENDER_ENABLED", mode="before")
    @classmethod
    def _parse_flag(cls, value: object) -> bool:
        return _bool_or(value, True)

    @field_validator("ASSETS_PATH")
    @classmethod
    def _normalize_assets_path(cls, value: str) -> str:
        return "/" + value.strip("/")

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def log_level_number(self) -> int:
        """Numeric level for logging.basicConfig."""
        return logging.getLevelName(self.LOG_LEVEL.upper())

    @property
    def mongodb_timeout_ms(self) -> int:
        return self.MONGODB_TIMEOUT_SECS * 1000


def _positive_int_or(value: object, default: int) -> int:
    """Parse a positive integer, returning ``default`` when it can't be parsed."""
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _bool_or(value: object, default: bool) -> bool:
    """Parse a true/false flag, returning ``default`` when it can't be parsed."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return default


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Raises:
        pydantic.ValidationError: If a value is malformed beyond recovery
    """
    return Settings()
