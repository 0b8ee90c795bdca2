import random

import numpy as np
import pytest

from portplanner.utils.union_find import DisjointSet
from portplanner.utils.validation import InvalidArgumentError


def test_initial_state():
    ds = DisjointSet(4)
    assert ds.component_count == 4
    assert [ds.find(i) for i in range(1, 5)] == [1, 2, 3, 4]
    assert ds.get_component_sizes() == {1: 1, 2: 1, 3: 1, 4: 1}


def test_union_merges_and_reports():
    ds = DisjointSet(5)
    assert ds.union(1, 2)
    assert ds.union(3, 4)
    assert ds.union(2, 4)
    assert not ds.union(1, 3)

    assert ds.component_count == 2
    assert ds.connected(1, 4)
    assert not ds.connected(1, 5)
    assert ds.component_size(3) == 4
    assert sorted(sorted(group) for group in ds.get_components().values()) == [[1, 2, 3, 4], [5]]


def test_union_noop_keeps_state():
    ds = DisjointSet(3)
    ds.union(1, 2)
    parents = list(ds.parent)
    sizes = list(ds.size)

    assert not ds.union(2, 1)
    assert ds.parent == parents
    assert ds.size == sizes
    assert ds.component_count == 2


def test_smaller_component_goes_under_larger():
    ds = DisjointSet(4)
    ds.union(2, 3)
    ds.union(2, 4)
    # {2,3,4} is larger than {1}, so its root stays the root
    ds.union(1, 3)
    assert ds.find(1) == ds.find(2) == 2


def test_tie_keeps_first_root():
    ds = DisjointSet(4)
    ds.union(3, 1)
    assert ds.find(1) == 3

    ds.union(2, 4)
    ds.union(4, 1)
    assert ds.find(3) == 2


def test_find_compresses_long_chain():
    n = 50_000
    ds = DisjointSet(n)
    # Force a chain by hand, deeper than the default recursion limit
    for i in range(2, n + 1):
        ds.parent[i] = i - 1

    assert ds.find(n) == 1
    assert all(ds.parent[i] == 1 for i in range(2, n + 1))


@pytest.mark.parametrize("seed", range(5))
def test_find_is_a_fixed_point(seed):
    rng = random.Random(seed)
    n = 40
    ds = DisjointSet(n)
    for _ in range(60):
        ds.union(rng.randint(1, n), rng.randint(1, n))

    for city in range(1, n + 1):
        root = ds.find(city)
        assert ds.find(root) == root
    assert ds.component_count == len(ds.get_components())
    assert sum(ds.get_component_sizes().values()) == n


@pytest.mark.parametrize("bad", [0, -1, 4, 1.0, "1", None, True])
def test_out_of_range_element(bad):
    ds = DisjointSet(3)
    with pytest.raises(InvalidArgumentError):
        ds.find(bad)
    with pytest.raises(InvalidArgumentError):
        ds.union(1, bad)


def test_negative_size_rejected():
    with pytest.raises(InvalidArgumentError):
        DisjointSet(-1)


def test_roots_indexes_by_id():
    ds = DisjointSet(3)
    ds.union(3, 2)
    assert ds.roots() == [0, 1, 3, 3]


def test_numpy_integer_elements():
    ds = DisjointSet(3)
    assert ds.union(np.int64(1), np.int32(3))
    assert ds.find(np.int64(3)) == 1
    assert type(ds.find(np.int64(3))) is int
