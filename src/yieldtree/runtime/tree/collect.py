"""Discovery of awaitable leaves and their positions."""

from __future__ import annotations

import copy
from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import Any

from yieldtree.foundation.errors import DuplicateAwaitableError, ErrorCode

from .classify import Kind, classify
from .wrapper import Identity, identity_of

Path = tuple[Hashable, ...]


@dataclass(slots=True, frozen=True)
class Yieldable:
    """An awaitable leaf and where it sits in the tree."""

    value: Any
    path: Path


def children(value: Any) -> Iterator[tuple[Hashable, Any]]:
    """Key/child pairs of a container in order."""
    return iter(value.items()) if isinstance(value, dict) else enumerate(value)


def rebuild(container: Any, items: list[Any]) -> Any:
    """New container of the same type as ``container`` holding ``items``.

    For dicts ``items`` are key/value pairs. Dict subclasses are copied and
    refilled, which keeps state such as a defaultdict's factory.
    """
    if isinstance(container, dict):
        if type(container) is dict:
            return dict(items)
        copied = copy.copy(container)
        copied.clear()
        copied.update(items)
        return copied
    if isinstance(container, tuple):
        return container._make(items) if hasattr(container, "_make") else tuple(items)  # type: ignore[attr-defined]
    return type(container)(items)


def get_yieldables(
    value: Any,
    path: Path = (),
    seen: dict[Identity, Yieldable] | None = None,
) -> dict[Identity, Yieldable]:
    """Map every awaitable leaf of a normalized tree to its Yieldable.

    Args:
        value: Normalized tree (see ``normalize``)
        path: Position of ``value`` inside the root
        seen: Identities recorded so far in this walk; a fresh dict per top-level call

    Returns:
        Identity -> Yieldable, in depth-first order

    Raises:
        DuplicateAwaitableError: If one awaitable occurs twice anywhere in the tree
    """
    if seen is None:
        seen = {}
    match classify(value):
        case Kind.CONTAINER:
            found: dict[Identity, Yieldable] = {}
            for key, child in children(value):
                found.update(get_yieldables(child, (*path, key), seen))
            return found
        case Kind.WRAPPER | Kind.HANDLE:
            identity = identity_of(value)
            if (previous := seen.get(identity)) is not None:
                raise DuplicateAwaitableError.create(
                    "Duplicated future or coroutine found",
                    ErrorCode.DUPLICATE_AWAITABLE,
                    path=path,
                    previous_path=previous.path,
                    identity=str(identity),
                )
            seen[identity] = entry = Yieldable(value, path)
            return {identity: entry}
        case _:
            return {}
