import random

import pytest

from heapdijkstra.exceptions import EmptyContainerError, InvalidArgumentError
from heapdijkstra.heap import DEFAULT_INITIAL_CAPACITY, BinaryHeap, natural_order


def _assert_heap_ordered(heap):
    items = list(heap)
    for i in range(1, len(items)):
        parent = items[(i - 1) // 2]
        assert heap.comparator(parent, items[i]) <= 0, (i, items)


def _drain(heap):
    out = []
    while not heap.is_empty():
        out.append(heap.extract_minimum())
    return out


# -----------------------------
# Construction
# -----------------------------

def test_new_heap_is_empty():
    h = BinaryHeap()
    assert h.is_empty()
    assert h.size() == 0
    assert len(h) == 0
    assert not h
    assert h.capacity == DEFAULT_INITIAL_CAPACITY
    assert h.comparator is natural_order


@pytest.mark.parametrize("capacity", [0, -1, -16])
def test_non_positive_capacity_rejected(capacity):
    with pytest.raises(InvalidArgumentError):
        BinaryHeap(initial_capacity=capacity)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        BinaryHeap.with_capacity(0)


def test_with_capacity_and_empty_factories():
    assert BinaryHeap.with_capacity(3).capacity == 3
    h = BinaryHeap.empty(lambda a, b: b - a)
    assert h.is_empty()
    assert h.capacity == DEFAULT_INITIAL_CAPACITY


# -----------------------------
# Empty-container failures
# -----------------------------

def test_minimum_on_empty_heap_fails():
    with pytest.raises(EmptyContainerError):
        BinaryHeap().minimum()


def test_delete_minimum_on_empty_heap_fails():
    h = BinaryHeap()
    with pytest.raises(EmptyContainerError):
        h.delete_minimum()


def test_empty_container_is_an_index_error():
    with pytest.raises(IndexError):
        BinaryHeap().extract_minimum()


# -----------------------------
# Basic operations
# -----------------------------

def test_single_element():
    h = BinaryHeap()
    h.insert(42)
    assert h.minimum() == 42
    assert h.size() == 1
    h.delete_minimum()
    assert h.is_empty()


def test_minimum_does_not_remove():
    h = BinaryHeap.of(4, 2, 7)
    assert h.minimum() == 2
    assert h.minimum() == 2
    assert h.size() == 3


def test_insert_keeps_minimum_at_root():
    h = BinaryHeap()
    for value, expected in [(5, 5), (3, 3), (8, 3), (1, 1), (9, 1), (2, 1)]:
        h.insert(value)
        assert h.minimum() == expected
        _assert_heap_ordered(h)


def test_duplicates_are_all_returned():
    h = BinaryHeap.of(3, 1, 3, 1, 2)
    assert _drain(h) == [1, 1, 2, 3, 3]


def test_storage_doubles_when_full():
    h = BinaryHeap(initial_capacity=1)
    capacities = []
    for i in range(5):
        h.insert(i)
        capacities.append(h.capacity)
    assert capacities == [1, 2, 4, 4, 8]
    assert _drain(h) == [0, 1, 2, 3, 4]


def test_delete_minimum_releases_slot():
    h = BinaryHeap.of(1, 2)
    h.delete_minimum()
    assert h._elements[1] is None


def test_clear_keeps_capacity():
    h = BinaryHeap(initial_capacity=2)
    for i in range(10):
        h.insert(i)
    cap = h.capacity
    h.clear()
    assert h.is_empty()
    assert h.capacity == cap
    h.insert(3)
    assert h.minimum() == 3


# -----------------------------
# Properties
# -----------------------------

@pytest.mark.parametrize("seed", range(10))
def test_invariant_holds_after_random_operations(seed):
    rnd = random.Random(seed)
    h = BinaryHeap(initial_capacity=2)
    mirror = []
    for _ in range(300):
        if mirror and rnd.random() < 0.4:
            assert h.minimum() == min(mirror)
            mirror.remove(h.minimum())
            h.delete_minimum()
        else:
            x = rnd.randint(-50, 50)
            h.insert(x)
            mirror.append(x)
        _assert_heap_ordered(h)
        assert h.size() == len(mirror)


@pytest.mark.parametrize("seed", range(5))
def test_heap_sort_property(seed):
    rnd = random.Random(seed)
    data = [rnd.randint(0, 20) for _ in range(100)]
    assert _drain(BinaryHeap.from_iterable(data)) == sorted(data)


def test_bulk_construction_matches_sequential_inserts():
    data = [5, 3, 8, 1, 9, 2]
    bulk = BinaryHeap.of(*data)
    _assert_heap_ordered(bulk)

    one_by_one = BinaryHeap()
    for x in data:
        one_by_one.insert(x)

    assert _drain(bulk) == _drain(one_by_one) == [1, 2, 3, 5, 8, 9]


def test_bulk_construction_is_linear():
    calls = 0

    def counting(a, b):
        nonlocal calls
        calls += 1
        return natural_order(a, b)

    n = 1024
    BinaryHeap.from_iterable(range(n, 0, -1), comparator=counting)
    assert calls <= 3 * n


def test_from_iterable_accepts_generators_and_empty_input():
    h = BinaryHeap.from_iterable(x * x for x in (3, -1, 2))
    assert _drain(h) == [1, 4, 9]
    empty = BinaryHeap.from_iterable([])
    assert empty.is_empty()
    assert empty.capacity == 1


# -----------------------------
# Comparators
# -----------------------------

def test_reverse_comparator_gives_max_heap():
    h = BinaryHeap.of(5, 3, 8, 1, comparator=lambda a, b: natural_order(b, a))
    assert _drain(h) == [8, 5, 3, 1]


def test_comparator_on_tuple_field():
    by_cost = lambda a, b: natural_order(a[1], b[1])
    h = BinaryHeap(by_cost)
    for item in [("x", 3), ("y", 1), ("z", 2)]:
        h.insert(item)
    assert [name for name, _ in _drain(h)] == ["y", "z", "x"]


def test_sift_down_prefers_left_child_on_tie():
    by_key = lambda a, b: natural_order(a[0], b[0])
    h = BinaryHeap.of((0, "root"), (1, "left"), (1, "right"), (5, "last"), comparator=by_key)
    h.delete_minimum()
    assert h.minimum() == (1, "left")


# -----------------------------
# Copy / iteration / repr
# -----------------------------

def test_copy_of_is_independent():
    original = BinaryHeap.of(4, 1, 3)
    copy = BinaryHeap.copy_of(original)
    copy.delete_minimum()
    copy.insert(0)
    assert original.minimum() == 1
    assert original.size() == 3
    assert copy.minimum() == 0
    assert copy.comparator is original.comparator


def test_iteration_does_not_consume():
    h = BinaryHeap.of(2, 1, 3)
    assert sorted(h) == [1, 2, 3]
    assert h.size() == 3


def test_repr_renders_tree():
    assert repr(BinaryHeap()) == "BinaryHeap(null)"
    assert (
        repr(BinaryHeap.of(1, 2, 3))
        == "BinaryHeap(Node(Node(null, 2, null), 1, Node(null, 3, null)))"
    )


def test_repr_handles_deep_heaps():
    h = BinaryHeap.from_iterable(range(5000))
    assert repr(h).startswith("BinaryHeap(Node(Node(")
