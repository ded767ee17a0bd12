"""Foundation: configuration and error model."""

from .config import CombineSettings, LoggingSettings, YieldtreeSettings, clear_settings_cache, get_settings
from .errors import (
    CancellationSignal,
    ControlSignal,
    DuplicateAwaitableError,
    ErrorCode,
    TreeError,
    YieldtreeException,
)

__all__ = [
    "CombineSettings", "LoggingSettings", "YieldtreeSettings", "clear_settings_cache", "get_settings",
    "CancellationSignal", "ControlSignal", "DuplicateAwaitableError", "ErrorCode", "TreeError",
    "YieldtreeException",
]
