"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from yieldtree.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.combine.throw_acceptable
    True
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # YIELDTREE_COMBINE_THROW_ACCEPTABLE=false
    # YIELDTREE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="YIELDTREE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force console colors (None = auto-detect)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class CombineSettings(BaseSettings):
    """Defaults for combining futures."""

    model_config = SettingsConfigDict(
        env_prefix="YIELDTREE_COMBINE_",
        extra="ignore",
    )

    throw_acceptable: bool = Field(
        default=True,
        description="Propagate every rejection; False absorbs non-fatal failures as values",
    )


class YieldtreeSettings(BaseSettings):
    """Root settings for yieldtree.

    Loads configuration from environment variables with YIELDTREE_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        YIELDTREE_DEBUG=true
        YIELDTREE_LOG_LEVEL=DEBUG
        YIELDTREE_LOG_FORMAT=json
        YIELDTREE_COMBINE_THROW_ACCEPTABLE=false
    """

    model_config = SettingsConfigDict(
        env_prefix="YIELDTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested settings (loaded with YIELDTREE_LOG_, YIELDTREE_COMBINE_)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    combine: CombineSettings = Field(default_factory=CombineSettings)

    @computed_field
    @property
    def log_level(self) -> str:
        """Effective log level; debug mode forces DEBUG."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> YieldtreeSettings:
    """Get the global settings instance (cached)."""
    return YieldtreeSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
