"""Uniform awaitable wrapper around a coroutine object.

A CoroutineWrapper pairs a coroutine with the yield key of the tree it came
from. Its identity is assigned once, at wrap time, from a process-wide counter
and never depends on the coroutine's contents or representation.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Coroutine, Generator, Hashable
from typing import Any, Generic, NamedTuple, TypeVar

T = TypeVar("T")

_ids = itertools.count(1)


class Identity(NamedTuple):
    """Stable key naming one awaitable leaf within a collection pass.

    ``kind`` keeps wrapper counters and native handle ids from colliding.
    """

    kind: str
    key: int

    def __str__(self) -> str:
        return f"{self.kind}#{self.key}"


class CoroutineWrapper(Generic[T]):
    """Awaitable wrapper for a running coroutine.

    The coroutine is scheduled lazily, on the first call to ``future()`` or
    the first ``await``, as an ``asyncio.Task`` on the running loop.

    Attributes:
        coroutine: The wrapped coroutine object
        yield_key: Context telling a driving engine where resumed values flow
        id: Identity number assigned at wrap time
    """

    __slots__ = ("coroutine", "yield_key", "id", "_task")

    def __init__(self, coroutine: Coroutine[Any, Any, T], yield_key: Hashable | None = None) -> None:
        self.coroutine = coroutine
        self.yield_key = yield_key
        self.id = next(_ids)
        self._task: asyncio.Task[T] | None = None

    @property
    def identity(self) -> Identity:
        return Identity("wrapper", self.id)

    @property
    def started(self) -> bool:
        return self._task is not None

    def future(self) -> asyncio.Task[T]:
        """Schedule the coroutine (once) and return its task."""
        if self._task is None:
            self._task = asyncio.ensure_future(self.coroutine)
        return self._task

    def cancel(self, msg: str | None = None) -> bool:
        """Cancel the task, or close the coroutine if it never started."""
        if self._task is None:
            self.coroutine.close()
            return False
        return self._task.cancel(msg)

    def __await__(self) -> Generator[Any, None, T]:
        return self.future().__await__()

    def __repr__(self) -> str:
        name = getattr(self.coroutine, "__qualname__", "?")
        return f"<CoroutineWrapper #{self.id} {name} yield_key={self.yield_key!r}>"


def identity_of(value: object) -> Identity:
    """Identity of an awaitable leaf: wrapper counter or the handle's native id."""
    if isinstance(value, CoroutineWrapper):
        return value.identity
    return Identity("handle", id(value))
