"""Waiting on a whole yieldable tree as one operation.

Example:
    >>> async def fetch_user(): ...
    >>> async def fetch_posts(): ...
    >>>
    >>> result = await gather_tree({
    ...     "user": fetch_user,
    ...     "feed": {"posts": fetch_posts(), "limit": 20},
    ... })
    >>> result["feed"]["limit"]
    20
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Hashable
from typing import Any

from yieldtree.foundation.errors import DuplicateAwaitableError
from yieldtree.runtime.observability import get_logger
from yieldtree.runtime.tree import (
    CoroutineWrapper,
    Kind,
    children,
    classify,
    get_applier,
    get_yieldables,
    normalize,
)

from .combine import wrap_futures


def future_of(leaf: Any) -> asyncio.Future[Any]:
    """Future driving an awaitable leaf: the handle itself or the wrapper's task."""
    return leaf.future() if isinstance(leaf, CoroutineWrapper) else leaf


def discard(tree: Any) -> None:
    """Close every coroutine in a normalized tree that was never scheduled."""
    match classify(tree):
        case Kind.CONTAINER:
            for _, child in children(tree):
                discard(child)
        case Kind.WRAPPER if not tree.started:
            tree.cancel()
        case _:
            pass


async def gather_tree(
    tree: Any,
    *,
    yield_key: Hashable | None = None,
    throw_acceptable: bool | None = None,
    then: Callable[[Any], Any] | None = None,
) -> Any:
    """Resolve every awaitable in ``tree`` and return the tree with results in place.

    Args:
        tree: Nesting of dicts, lists and tuples with awaitable or plain leaves
        yield_key: Context stored on every CoroutineWrapper created
        throw_acceptable: See ``wrap_futures``
        then: Optional continuation applied to the resolved tree

    Raises:
        DuplicateAwaitableError: If one awaitable occurs twice in the tree
        Exception: The first propagated failure of any leaf
    """
    normalized = normalize(tree, yield_key)
    try:
        yieldables = get_yieldables(normalized)
    except DuplicateAwaitableError:
        discard(normalized)
        raise
    apply = get_applier(normalized, yieldables, then)
    if not yieldables:
        return apply({})
    get_logger("yieldtree.gather").debug("gathering tree", awaitables=len(yieldables))
    identities = list(yieldables)
    results = await wrap_futures([future_of(yieldables[i].value) for i in identities], throw_acceptable)
    return apply(dict(zip(identities, results, strict=True)))
