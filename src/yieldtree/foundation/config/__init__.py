"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    CombineSettings,
    LoggingSettings,
    YieldtreeSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CombineSettings",
    "LoggingSettings",
    "YieldtreeSettings",
    "clear_settings_cache",
    "get_settings",
]
