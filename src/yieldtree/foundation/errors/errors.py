"""Standardized error handling for yieldable trees.

Provides error codes and a structured error payload carried by every exception
this package raises. Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ErrorCode(StrEnum):
    """Error codes for tree collection and combination failures."""
    DUPLICATE_AWAITABLE = "DUPLICATE_AWAITABLE"
    CONTROL = "CONTROL"
    CANCELLATION = "CANCELLATION"


class TreeError(BaseModel):
    """Structured error for a failure located inside a yieldable tree.

    Attributes:
        code: Machine-readable error code
        message: Human-readable description
        path: Position of the offending leaf, if any
        previous_path: Position where the same awaitable was first seen
        identity: Rendered identity of the offending awaitable
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: ErrorCode
    message: str = Field(min_length=1)
    path: tuple[Any, ...] | None = None
    previous_path: tuple[Any, ...] | None = None
    identity: str | None = None

    @field_serializer("path", "previous_path")
    def _serialize_path(self, v: tuple[Any, ...] | None) -> list[str] | None:
        return None if v is None else [str(k) for k in v]

    def render(self) -> str:
        """Format as a single descriptive line."""
        parts = [f"[{self.code}] {self.message}"]
        if self.path is not None:
            parts.append(f"at {list(self.path)!r}")
        if self.previous_path is not None:
            parts.append(f"(first seen at {list(self.previous_path)!r})")
        return " ".join(parts)


class YieldtreeException(Exception):
    """Exception wrapping a TreeError for raising."""

    def __init__(self, error: TreeError) -> None:
        self.error = error
        super().__init__(error.render())

    @classmethod
    def create(cls, message: str, code: ErrorCode, **details: Any) -> Self:
        return cls(TreeError(code=code, message=message, **details))


class DuplicateAwaitableError(YieldtreeException, ValueError):
    """The same awaitable occurs twice in one tree."""


class ControlSignal(YieldtreeException):
    """Designed control-flow failure. Always fatal, never absorbed.

    Carries an optional ``value`` for whoever handles the signal.
    """

    code = ErrorCode.CONTROL

    def __init__(self, value: Any = None, message: str | None = None) -> None:
        self.value = value
        super().__init__(TreeError(code=self.code, message=message or type(self).__name__))


class CancellationSignal(ControlSignal):
    """Control signal asking the combinator to cancel the sender's siblings."""

    code = ErrorCode.CANCELLATION
