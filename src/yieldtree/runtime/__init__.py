"""Runtime: tree operations, future combination and observability."""

from .concurrency import Sweep, future_of, gather_tree, wrap_futures
from .observability import configure_logging, get_logger, log_context
from .tree import (
    CoroutineWrapper,
    Identity,
    Kind,
    Path,
    Yieldable,
    classify,
    get_applier,
    get_yieldables,
    normalize,
)

__all__ = [
    "Sweep", "future_of", "gather_tree", "wrap_futures",
    "configure_logging", "get_logger", "log_context",
    "CoroutineWrapper", "Identity", "Kind", "Path", "Yieldable",
    "classify", "get_applier", "get_yieldables", "normalize",
]
