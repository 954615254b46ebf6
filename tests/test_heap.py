"""
Unit tests for the addressable MinHeap and its Decreaser handles.
"""

import math
import random

import pytest

from sptree import (
    ConfigError,
    EmptyQueueError,
    HeapFullError,
    INF,
    InvalidDecreaseError,
    MinHeap,
    Ticker,
    VertexAndDist,
)


def test_extract_in_sorted_order():
    h = MinHeap()
    for x in [5, 3, 8, 1, 9, 2, 7]:
        h.insert(x)
    out = []
    while not h.is_empty():
        out.append(h.extract_min())
    assert out == [1, 2, 3, 5, 7, 8, 9]


def test_extract_from_empty_heap_raises():
    h = MinHeap()
    with pytest.raises(EmptyQueueError):
        h.extract_min()
    with pytest.raises(EmptyQueueError):
        h.peek()


def test_extract_after_draining_raises():
    h = MinHeap()
    h.insert(1)
    h.extract_min()
    with pytest.raises(EmptyQueueError):
        h.extract_min()


def test_decrease_is_visible_immediately_and_reorders():
    h = MinHeap()
    a = h.insert(10)
    h.insert(5)
    h.insert(7)

    a.decrease(1)

    assert a.get_value() == 1
    assert h.peek() == 1
    assert len(h) == 3
    assert h.extract_min() == 1


def test_decrease_to_equal_or_larger_value_is_rejected():
    h = MinHeap()
    a = h.insert(4)
    b = h.insert(6)

    with pytest.raises(InvalidDecreaseError):
        a.decrease(4)
    with pytest.raises(InvalidDecreaseError):
        b.decrease(9)

    # rejected calls leave the heap untouched
    assert a.get_value() == 4
    assert b.get_value() == 6
    assert [h.extract_min(), h.extract_min()] == [4, 6]


def test_decrease_after_extraction_is_rejected():
    h = MinHeap()
    a = h.insert(1)
    h.insert(2)
    assert h.extract_min() == 1
    assert not a.live

    with pytest.raises(InvalidDecreaseError):
        a.decrease(0)
    # the final value stays readable
    assert a.get_value() == 1


def test_handle_reads_final_value_after_extraction():
    h = MinHeap()
    handles = [h.insert(x) for x in (30, 20, 10)]
    handles[0].decrease(5)
    while not h.is_empty():
        h.extract_min()
    assert [hd.get_value() for hd in handles] == [5, 20, 10]


def test_capacity_bounds_live_entries():
    h = MinHeap(capacity=2)
    h.insert(1)
    h.insert(2)
    with pytest.raises(HeapFullError):
        h.insert(3)
    h.extract_min()
    h.insert(3)
    assert len(h) == 2


def test_invalid_arity_rejected():
    with pytest.raises(ConfigError):
        MinHeap(arity=1)


@pytest.mark.parametrize("arity", [2, 3, 4, 8])
@pytest.mark.parametrize("seed", range(5))
def test_random_operations_match_brute_force(arity, seed):
    rng = random.Random(seed)
    h = MinHeap(arity=arity)
    live = {}  # handle -> value
    next_id = 0

    for _ in range(400):
        op = rng.random()
        if op < 0.45:
            # (value, id) keeps values distinct so the minimum is unique
            value = (rng.randint(0, 1000), next_id)
            next_id += 1
            live[h.insert(value)] = value
        elif op < 0.8 and live:
            handle = rng.choice(list(live))
            cur = live[handle]
            if cur[0] == 0:
                continue
            new = (rng.randint(0, cur[0] - 1), cur[1])
            handle.decrease(new)
            live[handle] = new
            assert handle.get_value() == new
        elif live:
            expected = min(live.values())
            got = h.extract_min()
            assert got == expected
            for handle, value in list(live.items()):
                if value == got:
                    del live[handle]
        assert len(h) == len(live)

    while live:
        expected = min(live.values())
        assert h.extract_min() == expected
        live = {k: v for k, v in live.items() if v != expected}
    assert h.is_empty()


def test_decrease_cost_is_logarithmic():
    n = 1024
    ticker = Ticker()
    h = MinHeap(ticker=ticker)
    handles = [h.insert(1000 + i) for i in range(n)]

    # the last inserted entry sits at a leaf; moving it to the root
    # needs at most one swap per level
    ticker.reset()
    handles[-1].decrease(0)
    assert 0 < ticker.ticks <= math.ceil(math.log2(n))
    assert h.peek() == 0


def test_extract_cost_is_logarithmic():
    n = 512
    ticker = Ticker()
    h = MinHeap(ticker=ticker)
    for x in random.Random(1).sample(range(10 * n), n):
        h.insert(x)
    bound = math.ceil(math.log2(n))
    while not h.is_empty():
        ticker.reset()
        h.extract_min()
        assert ticker.ticks <= bound


def test_vertex_and_dist_orders_by_distance_with_infinity():
    h = MinHeap()
    far = h.insert(VertexAndDist("far", INF))
    h.insert(VertexAndDist("near", 3))
    far.decrease(VertexAndDist("far", 1))
    assert h.extract_min().vertex == "far"
    assert h.extract_min().vertex == "near"


def test_infinite_entries_cannot_be_decreased_to_infinity():
    h = MinHeap()
    a = h.insert(VertexAndDist("a", INF))
    with pytest.raises(InvalidDecreaseError):
        a.decrease(VertexAndDist("a", INF))
