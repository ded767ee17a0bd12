"""Structured concurrency over yieldable trees.

Key Components:
    - wrap_futures: Combine futures with sibling cancellation and failure absorption
    - gather_tree: Resolve a whole nested tree of awaitables in one call
    - Sweep: Per-call cancellation context used by wrap_futures

Example:
    >>> from yieldtree.runtime.concurrency import gather_tree, wrap_futures
    >>>
    >>> values = await wrap_futures([task_a, task_b], throw_acceptable=False)
    >>> tree = await gather_tree({"a": fetch_a, "b": [fetch_b(), 3]})
"""

from __future__ import annotations

from .combine import Sweep, wrap_futures
from .gather import discard, future_of, gather_tree

__all__ = [
    "Sweep",
    "discard",
    "future_of",
    "gather_tree",
    "wrap_futures",
]
