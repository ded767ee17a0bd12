"""yieldtree: wait on arbitrarily nested trees of awaitables as one future.

Hand over a nesting of dicts, lists and tuples whose leaves are coroutine
functions, coroutines, asyncio futures or plain values; get the same shape
back with every awaitable replaced by its result.

Quick Start:
    >>> from yieldtree import gather_tree
    >>>
    >>> result = await gather_tree({
    ...     "user": fetch_user,                  # coroutine function, called for you
    ...     "posts": [fetch_posts(1), fetch_posts(2)],
    ...     "page": 1,                           # plain values pass through
    ... })

Lower-level building blocks:
    >>> tree = normalize(raw_tree)               # coroutines -> CoroutineWrapper
    >>> yieldables = get_yieldables(tree)        # Identity -> Yieldable(value, path)
    >>> results = await wrap_futures(futures, throw_acceptable=False)
    >>> resolved = get_applier(tree, yieldables)(dict(zip(yieldables, results)))
"""

from yieldtree.foundation.config import (
    CombineSettings,
    LoggingSettings,
    YieldtreeSettings,
    clear_settings_cache,
    get_settings,
)
from yieldtree.foundation.errors import (
    CancellationSignal,
    ControlSignal,
    DuplicateAwaitableError,
    ErrorCode,
    TreeError,
    YieldtreeException,
)
from yieldtree.runtime.concurrency import Sweep, future_of, gather_tree, wrap_futures
from yieldtree.runtime.observability import configure_logging, get_logger, log_context
from yieldtree.runtime.tree import (
    CoroutineWrapper,
    Identity,
    Kind,
    Path,
    Yieldable,
    classify,
    get_applier,
    get_yieldables,
    identity_of,
    is_awaitable_leaf,
    is_cancellation_signal,
    is_container,
    is_coroutine_factory,
    is_coroutine_wrapper,
    is_external_handle,
    is_fatal,
    is_running_coroutine,
    normalize,
)

__version__ = "0.1.0"

__all__ = [
    # Tree operations
    "normalize", "get_yieldables", "get_applier",
    # Combination
    "wrap_futures", "gather_tree", "future_of", "Sweep",
    # Types
    "CoroutineWrapper", "Identity", "Path", "Yieldable", "identity_of",
    # Classification
    "Kind", "classify", "is_awaitable_leaf", "is_cancellation_signal", "is_container",
    "is_coroutine_factory", "is_coroutine_wrapper", "is_external_handle", "is_fatal", "is_running_coroutine",
    # Errors
    "ErrorCode", "TreeError", "YieldtreeException", "DuplicateAwaitableError", "ControlSignal", "CancellationSignal",
    # Settings
    "CombineSettings", "LoggingSettings", "YieldtreeSettings", "get_settings", "clear_settings_cache",
    # Logging
    "configure_logging", "get_logger", "log_context",
]
