"""Unified error handling for yieldtree.

- ErrorCode: Standard error codes
- TreeError/YieldtreeException: Structured errors and exceptions
- DuplicateAwaitableError: Same awaitable found twice in one tree
- ControlSignal/CancellationSignal: Designed, always-fatal control failures
"""

from .errors import (
    CancellationSignal,
    ControlSignal,
    DuplicateAwaitableError,
    ErrorCode,
    TreeError,
    YieldtreeException,
)
from .types import JsonDict, JsonMapping, JsonPrimitive, JsonValue

__all__ = [
    # Core errors
    "ErrorCode", "TreeError", "YieldtreeException", "DuplicateAwaitableError",
    # Control flow
    "ControlSignal", "CancellationSignal",
    # JSON aliases
    "JsonDict", "JsonMapping", "JsonPrimitive", "JsonValue",
]
