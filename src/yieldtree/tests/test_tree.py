"""Tests for yieldable tree operations.

Validates:
- Classification of tree values and failures
- Normalization preserves shape and wraps coroutines
- Collection finds every awaitable with its path and rejects duplicates
- Application rebuilds trees without touching the original
"""

from __future__ import annotations

import asyncio
import inspect
from collections import OrderedDict, defaultdict
from functools import partial
from typing import NamedTuple

import pytest

from yieldtree import (
    CancellationSignal,
    ControlSignal,
    CoroutineWrapper,
    DuplicateAwaitableError,
    ErrorCode,
    Kind,
    Yieldable,
    classify,
    get_applier,
    get_yieldables,
    identity_of,
    is_awaitable_leaf,
    is_fatal,
    normalize,
)


async def answer(x: int = 42) -> int:
    return x


class Point(NamedTuple):
    x: object
    y: object


# ─────────────────────────────────────────────────────────────────────────────
# Classification
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_classify_kinds() -> None:
    coro = answer()
    wrapper = CoroutineWrapper(answer())
    fut = asyncio.get_running_loop().create_future()
    try:
        assert classify(answer) is Kind.FACTORY
        assert classify(partial(answer, 1)) is Kind.FACTORY
        assert classify(coro) is Kind.COROUTINE
        assert classify(wrapper) is Kind.WRAPPER
        assert classify(fut) is Kind.HANDLE
        assert classify({"a": 1}) is Kind.CONTAINER
        assert classify([1]) is Kind.CONTAINER
        assert classify((1,)) is Kind.CONTAINER
        for plain in (1, "text", b"bytes", None, 2.5, object(), len):
            assert classify(plain) is Kind.PLAIN
        assert is_awaitable_leaf(fut) and is_awaitable_leaf(wrapper)
        assert not is_awaitable_leaf(coro)
    finally:
        coro.close()
        wrapper.coroutine.close()


def test_fatal_classification() -> None:
    assert not is_fatal(ValueError("boom"))
    assert not is_fatal(RuntimeError("boom"))
    assert is_fatal(ControlSignal())
    assert is_fatal(CancellationSignal())
    assert is_fatal(asyncio.CancelledError())
    assert is_fatal(KeyboardInterrupt())


# ─────────────────────────────────────────────────────────────────────────────
# Coroutine wrapper
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_wrapper_identity_and_await() -> None:
    first, second = CoroutineWrapper(answer(1), "k"), CoroutineWrapper(answer(2))
    assert first.id < second.id
    assert identity_of(first) != identity_of(second)
    assert identity_of(first) == first.identity
    assert first.yield_key == "k"

    assert not first.started
    assert first.future() is first.future()
    assert await first == 1
    assert await second.future() == 2


def test_wrapper_cancel_before_start_closes_coroutine() -> None:
    wrapper = CoroutineWrapper(answer())
    assert wrapper.cancel() is False
    assert inspect.getcoroutinestate(wrapper.coroutine) == inspect.CORO_CLOSED


@pytest.mark.asyncio
async def test_handle_identity_never_collides_with_wrapper() -> None:
    fut = asyncio.get_running_loop().create_future()
    wrapper = CoroutineWrapper(answer())
    try:
        assert identity_of(fut).kind == Kind.HANDLE
        assert identity_of(wrapper).kind == Kind.WRAPPER
        assert identity_of(fut) == identity_of(fut)
    finally:
        wrapper.coroutine.close()


# ─────────────────────────────────────────────────────────────────────────────
# Normalize
# ─────────────────────────────────────────────────────────────────────────────


def test_normalize_plain_values_unchanged() -> None:
    for value in (1, "text", None, 2.5, b"bytes", frozenset({1}), len):
        assert normalize(value, "k") is value


def test_normalize_preserves_keys_order_and_types() -> None:
    tree = {"z": 1, "a": [2, (3, 4)], "m": {"x": None}, "p": Point(5, 6)}
    result = normalize(tree, "k")
    assert result == tree
    assert result is not tree
    assert list(result) == ["z", "a", "m", "p"]
    assert isinstance(result["a"][1], tuple)
    assert isinstance(result["p"], Point)


def test_normalize_wraps_factories_and_coroutines() -> None:
    coro = answer(7)
    result = normalize({"f": answer, "c": [coro], "p": partial(answer, 3)}, yield_key="key")

    for wrapper in (result["f"], result["c"][0], result["p"]):
        assert isinstance(wrapper, CoroutineWrapper)
        assert wrapper.yield_key == "key"
        wrapper.coroutine.close()
    assert result["c"][0].coroutine is coro


def test_normalize_shares_wrapper_for_repeated_coroutine() -> None:
    coro = answer()
    tree = normalize({"a": coro, "b": [coro]})

    assert tree["a"] is tree["b"][0]
    with pytest.raises(DuplicateAwaitableError) as info:
        get_yieldables(tree)
    assert info.value.error.path == ("b", 0)
    assert info.value.error.previous_path == ("a",)
    coro.close()


def test_normalize_wrappers_not_shared_across_calls() -> None:
    coro = answer()
    assert normalize(coro) is not normalize(coro)
    coro.close()


def test_normalize_keeps_dict_subclasses() -> None:
    counts: defaultdict[str, list[int]] = defaultdict(list, {"b": [1]})
    ordered = OrderedDict([("z", 1), ("a", 2)])

    result = normalize({"counts": counts, "ordered": ordered})

    assert isinstance(result["ordered"], OrderedDict)
    assert list(result["ordered"]) == ["z", "a"]
    assert isinstance(result["counts"], defaultdict)
    assert result["counts"] == {"b": [1]}
    assert result["counts"]["new"] == []
    assert "new" not in counts


def test_normalize_keeps_existing_wrapper() -> None:
    wrapper = CoroutineWrapper(answer())
    assert normalize([wrapper])[0] is wrapper
    wrapper.coroutine.close()


def test_normalize_only_coroutine_functions_are_factories() -> None:
    def make() -> dict[str, object]:
        return {"a": 1}

    async def make_tree() -> None: ...

    # Only coroutine functions are factories; plain callables are values.
    assert normalize(make) is make
    wrapper = normalize(make_tree)
    assert isinstance(wrapper, CoroutineWrapper)
    wrapper.coroutine.close()


# ─────────────────────────────────────────────────────────────────────────────
# Collect
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_yieldables_paths() -> None:
    loop = asyncio.get_running_loop()
    a, b = loop.create_future(), loop.create_future()
    tree = {"a": a, "b": {"c": b, "d": 42}, "e": "plain"}

    assert get_yieldables(tree) == {
        identity_of(a): Yieldable(a, ("a",)),
        identity_of(b): Yieldable(b, ("b", "c")),
    }


@pytest.mark.asyncio
async def test_get_yieldables_sequences_and_wrappers() -> None:
    fut = asyncio.get_running_loop().create_future()
    tree = normalize([answer, (1, fut)])
    found = get_yieldables(tree)

    assert [y.path for y in found.values()] == [(0,), (1, 1)]
    assert list(found) == [identity_of(tree[0]), identity_of(fut)]
    tree[0].coroutine.close()


@pytest.mark.asyncio
async def test_get_yieldables_root_leaf() -> None:
    fut = asyncio.get_running_loop().create_future()
    assert get_yieldables(fut) == {identity_of(fut): Yieldable(fut, ())}
    assert get_yieldables(42) == {}
    assert get_yieldables({"a": [1, "x"]}) == {}


@pytest.mark.asyncio
async def test_get_yieldables_duplicate_across_branches() -> None:
    fut = asyncio.get_running_loop().create_future()

    with pytest.raises(DuplicateAwaitableError) as info:
        get_yieldables({"x": fut, "y": [1, fut]})

    error = info.value.error
    assert error.code is ErrorCode.DUPLICATE_AWAITABLE
    assert error.path == ("y", 1)
    assert error.previous_path == ("x",)
    assert error.identity == str(identity_of(fut))
    assert isinstance(info.value, ValueError)


def test_get_yieldables_duplicate_wrapper() -> None:
    wrapper = CoroutineWrapper(answer())
    with pytest.raises(DuplicateAwaitableError):
        get_yieldables([wrapper, {"again": wrapper}])
    wrapper.coroutine.close()


@pytest.mark.asyncio
async def test_get_yieldables_fresh_per_call() -> None:
    fut = asyncio.get_running_loop().create_future()
    tree = {"a": fut}
    assert get_yieldables(tree) == get_yieldables(tree)


# ─────────────────────────────────────────────────────────────────────────────
# Apply
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_applier_substitutes_results() -> None:
    loop = asyncio.get_running_loop()
    a, b = loop.create_future(), loop.create_future()
    tree = {"a": a, "b": {"c": b, "d": 42}}
    found = get_yieldables(tree)

    result = get_applier(tree, found)({identity_of(a): "R1", identity_of(b): "R2"})

    assert result == {"a": "R1", "b": {"c": "R2", "d": 42}}
    assert tree["a"] is a and tree["b"]["c"] is b


@pytest.mark.asyncio
async def test_applier_sequences_keep_type() -> None:
    loop = asyncio.get_running_loop()
    a, b = loop.create_future(), loop.create_future()
    tree = [a, Point(b, 1), ("keep",)]
    found = get_yieldables(tree)

    result = get_applier(tree, found)({identity_of(b): 2, identity_of(a): 1})

    assert result == [1, Point(2, 1), ("keep",)]
    assert isinstance(result[1], Point)
    assert result[2] is tree[2]


@pytest.mark.asyncio
async def test_applier_dict_subclass_keeps_type() -> None:
    fut = asyncio.get_running_loop().create_future()
    tree = OrderedDict([("x", fut), ("y", 1)])

    result = get_applier(tree, get_yieldables(tree))({identity_of(fut): "done"})

    assert isinstance(result, OrderedDict)
    assert list(result.items()) == [("x", "done"), ("y", 1)]
    assert tree["x"] is fut


@pytest.mark.asyncio
async def test_applier_root_leaf_and_continuation() -> None:
    fut = asyncio.get_running_loop().create_future()
    found = get_yieldables(fut)

    assert get_applier(fut, found)({identity_of(fut): "done"}) == "done"
    assert get_applier({"x": fut}, get_yieldables({"x": fut}), lambda t: ("next", t))(
        {identity_of(fut): 1}
    ) == ("next", {"x": 1})


def test_applier_empty_results() -> None:
    tree = {"a": 1}
    assert get_applier(tree, {})({}) is tree
