"""Yieldable trees: classification, normalization, collection and reconstruction.

A yieldable tree is any nesting of dicts, lists and tuples whose leaves are
plain values, coroutine functions, coroutines, or asyncio futures.

Example:
    >>> tree = normalize({"user": fetch_user, "posts": [fetch_posts(), 42]})
    >>> yieldables = get_yieldables(tree)
    >>> apply = get_applier(tree, yieldables)
"""

from .apply import get_applier, replace_at
from .classify import (
    Kind,
    classify,
    is_awaitable_leaf,
    is_cancellation_signal,
    is_container,
    is_coroutine_factory,
    is_coroutine_wrapper,
    is_external_handle,
    is_fatal,
    is_running_coroutine,
)
from .collect import Path, Yieldable, children, get_yieldables, rebuild
from .normalize import normalize
from .wrapper import CoroutineWrapper, Identity, identity_of

__all__ = [
    # Classification
    "Kind",
    "classify",
    "is_awaitable_leaf",
    "is_cancellation_signal",
    "is_container",
    "is_coroutine_factory",
    "is_coroutine_wrapper",
    "is_external_handle",
    "is_fatal",
    "is_running_coroutine",
    # Wrapping
    "CoroutineWrapper",
    "Identity",
    "identity_of",
    # Tree operations
    "normalize",
    "get_yieldables",
    "get_applier",
    "replace_at",
    "children",
    "rebuild",
    "Path",
    "Yieldable",
]
