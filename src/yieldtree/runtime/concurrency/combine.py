"""Combining futures with cooperative sibling cancellation.

wrap_futures() waits for every constituent like asyncio.gather, with two
behaviors layered on top:
    - A CancellationSignal from one constituent cancels all its siblings
    - Non-fatal failures can be absorbed and returned as values

Example:
    >>> results = await wrap_futures([fetch_a(), fetch_b()], throw_acceptable=False)
    >>> [r for r in results if isinstance(r, Exception)]  # absorbed failures
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from yieldtree.foundation.config import get_settings
from yieldtree.runtime.observability import get_logger
from yieldtree.runtime.tree import is_cancellation_signal, is_fatal

T = TypeVar("T")


@dataclass(slots=True)
class Sweep:
    """Per-call cancellation state for one wrap_futures() invocation.

    Attributes:
        futures: Constituents in input order
        control: Constituent that raised a CancellationSignal, if any
        cancelled: Indices of siblings whose cancel() returned true
    """

    futures: Sequence[Awaitable[Any]]
    control: Awaitable[Any] | None = None
    cancelled: list[int] = field(default_factory=list)

    def run(self) -> int:
        """Cancel every cancellable sibling of the control future. Returns the count cancelled."""
        if self.control is None:
            return 0
        log = get_logger("yieldtree.combine")
        for index, future in enumerate(self.futures):
            if future is self.control or not callable(cancel := getattr(future, "cancel", None)):
                continue
            try:
                accepted = cancel()
            except Exception as e:  # best effort; the sibling may already be finished
                log.debug("sibling cancel failed", index=index, error=repr(e))
                continue
            if accepted:
                self.cancelled.append(index)
        log.debug("cancellation sweep", cancelled=len(self.cancelled), total=len(self.futures))
        return len(self.cancelled)


async def _settle(future: Awaitable[T], sweep: Sweep, throw_acceptable: bool) -> T | BaseException:
    """Await one constituent, classifying its failure."""
    try:
        return await future
    except BaseException as e:
        if is_cancellation_signal(e):
            sweep.control = future
        if throw_acceptable or is_fatal(e):
            raise
        return e


async def _combine(sweep: Sweep, throw_acceptable: bool) -> list[Any]:
    if not sweep.futures:
        return []
    try:
        return list(await asyncio.gather(*(_settle(f, sweep, throw_acceptable) for f in sweep.futures)))
    finally:
        sweep.run()


def wrap_futures(
    futures: Sequence[Awaitable[Any]],
    throw_acceptable: bool | None = None,
) -> asyncio.Future[list[Any]]:
    """Combine futures into one, with sibling cancellation and failure absorption.

    Rejections are classified per constituent:
        - CancellationSignal: recorded as the control future, then propagated
        - throw_acceptable, or a fatal failure: propagated
        - otherwise: absorbed, the exception object becomes that slot's value

    The combined future fails with the first propagated failure without
    waiting for slower siblings. Before it settles either way, every
    cancellable sibling of a control future is cancelled.

    Args:
        futures: Futures, tasks or other awaitables
        throw_acceptable: Propagate every rejection. None uses
            ``settings.combine.throw_acceptable``

    Returns:
        Future resolving to settled values in input order

    Raises:
        RuntimeError: If called without a running event loop

    Example:
        >>> combined = wrap_futures([task_a, task_b], throw_acceptable=True)
        >>> a, b = await combined
    """
    if throw_acceptable is None:
        throw_acceptable = get_settings().combine.throw_acceptable
    sweep = Sweep(list(futures))
    return asyncio.ensure_future(_combine(sweep, throw_acceptable), loop=asyncio.get_running_loop())
