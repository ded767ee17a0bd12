"""Classification of tree values and failures.

Every value in a yieldable tree falls into exactly one Kind. Normalizer and
collector dispatch on the Kind instead of probing types repeatedly.
"""

from __future__ import annotations

import asyncio
import inspect
from enum import StrEnum

from yieldtree.foundation.errors import CancellationSignal, ControlSignal

from .wrapper import CoroutineWrapper


class Kind(StrEnum):
    """Closed set of tree value kinds."""
    FACTORY = "factory"      # async function, called with no arguments
    COROUTINE = "coroutine"  # coroutine object, not yet wrapped
    WRAPPER = "wrapper"      # CoroutineWrapper
    HANDLE = "handle"        # asyncio future or task
    CONTAINER = "container"  # dict, list or tuple
    PLAIN = "plain"          # anything else


CONTAINER_TYPES: tuple[type, ...] = (dict, list, tuple)


def classify(value: object) -> Kind:
    """Return the Kind of a tree value."""
    if isinstance(value, CoroutineWrapper):
        return Kind.WRAPPER
    if isinstance(value, CONTAINER_TYPES):
        return Kind.CONTAINER
    if asyncio.isfuture(value):
        return Kind.HANDLE
    if inspect.iscoroutine(value):
        return Kind.COROUTINE
    if inspect.iscoroutinefunction(value):
        return Kind.FACTORY
    return Kind.PLAIN


def is_coroutine_factory(value: object) -> bool:
    return classify(value) is Kind.FACTORY


def is_running_coroutine(value: object) -> bool:
    return classify(value) is Kind.COROUTINE


def is_coroutine_wrapper(value: object) -> bool:
    return classify(value) is Kind.WRAPPER


def is_external_handle(value: object) -> bool:
    return classify(value) is Kind.HANDLE


def is_container(value: object) -> bool:
    return classify(value) is Kind.CONTAINER


def is_awaitable_leaf(value: object) -> bool:
    """Whether the value is a leaf the collector must wait on."""
    return classify(value) in (Kind.WRAPPER, Kind.HANDLE)


def is_cancellation_signal(exc: BaseException) -> bool:
    return isinstance(exc, CancellationSignal)


def is_fatal(exc: BaseException) -> bool:
    """Fatal failures always propagate: control signals and non-Exception throwables.

    Covers KeyboardInterrupt, SystemExit and asyncio.CancelledError.
    """
    return isinstance(exc, ControlSignal) or not isinstance(exc, Exception)
