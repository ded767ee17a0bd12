"""Recursive normalization of yieldable trees."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from .classify import Kind, classify
from .collect import rebuild
from .wrapper import CoroutineWrapper


def normalize(
    value: Any,
    yield_key: Hashable | None = None,
    wrapped: dict[int, CoroutineWrapper[Any]] | None = None,
) -> Any:
    """Turn every coroutine factory and coroutine in a tree into a CoroutineWrapper.

    Factories are called with no arguments first. Containers are rebuilt with
    the same type, keys and order; every other value is returned unchanged.
    A coroutine object occurring more than once gets one shared wrapper, so
    the collector sees the repeat.

    Args:
        value: Tree to normalize
        yield_key: Context stored on every wrapper created
        wrapped: Wrappers created so far in this walk, keyed by ``id(coroutine)``;
            a fresh dict per top-level call

    Example:
        >>> async def fetch() -> int: ...
        >>> tree = normalize({"a": fetch, "b": [1, 2]}, yield_key="k")
        >>> tree["a"].yield_key, tree["b"]
        ('k', [1, 2])
    """
    if wrapped is None:
        wrapped = {}
    kind = classify(value)
    if kind is Kind.FACTORY:
        value = value()
        kind = classify(value)
    match kind:
        case Kind.COROUTINE:
            if (wrapper := wrapped.get(id(value))) is None:
                wrapped[id(value)] = wrapper = CoroutineWrapper(value, yield_key)
            return wrapper
        case Kind.CONTAINER if isinstance(value, dict):
            return rebuild(value, [(k, normalize(v, yield_key, wrapped)) for k, v in value.items()])
        case Kind.CONTAINER:
            return rebuild(value, [normalize(v, yield_key, wrapped) for v in value])
        case _:
            return value
