"""Reconstruction of a tree once its awaitables have settled."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from typing import Any

from .collect import Path, Yieldable, rebuild
from .wrapper import Identity


def replace_at(tree: Any, path: Path, value: Any) -> Any:
    """Return a copy of ``tree`` with the slot at ``path`` set to ``value``.

    Only containers along the path are copied; siblings are shared.
    """
    if not path:
        return value
    key, rest = path[0], path[1:]
    if isinstance(tree, dict):
        copied = copy.copy(tree)
        copied[key] = replace_at(copied[key], rest, value)
        return copied
    items = list(tree)
    items[key] = replace_at(items[key], rest, value)  # type: ignore[index]
    return rebuild(tree, items)


def get_applier(
    tree: Any,
    yieldables: Mapping[Identity, Yieldable],
    then: Callable[[Any], Any] | None = None,
) -> Callable[[Mapping[Identity, Any]], Any]:
    """Build a function substituting settled values back into ``tree``.

    Args:
        tree: Normalized tree the yieldables were collected from
        yieldables: Output of ``get_yieldables`` for that tree
        then: Optional continuation receiving the substituted tree

    Returns:
        Function taking Identity -> settled value and returning the rebuilt
        tree, or ``then(rebuilt)`` when a continuation was supplied

    Example:
        >>> apply = get_applier(tree, yieldables)
        >>> apply({identity: "result"})
    """
    def apply(results: Mapping[Identity, Any]) -> Any:
        rebuilt = tree
        for identity, resolved in results.items():
            rebuilt = replace_at(rebuilt, yieldables[identity].path, resolved)
        return then(rebuilt) if then is not None else rebuilt

    return apply
