"""Tests for the first-element-pivot quicksort: contract, edge cases, errors, parallel mode."""

from __future__ import annotations

import pickle
from collections import Counter

import pytest

import pivotsort
from pivotsort.algorithms.quicksort import partition, sort
from pivotsort.errors import IncomparableElementsError, PivotsortError


class TestSort:
    def test_empty(self):
        assert sort([]) == []

    def test_single(self):
        assert sort([5]) == [5]

    def test_three(self):
        assert sort([3, 1, 2]) == [1, 2, 3]

    def test_duplicates_preserved_in_count(self):
        assert sort([2, 2, 1, 1]) == [1, 1, 2, 2]

    def test_descending_worst_case(self):
        assert sort([5, 4, 3, 2, 1]) == [1, 2, 3, 4, 5]

    def test_package_level_alias(self):
        assert pivotsort.sort is sort
        assert pivotsort.sort([9, 0, 4]) == [0, 4, 9]

    def test_returns_new_list(self):
        a = [1]
        out = sort(a)
        assert out == a
        assert out is not a

    def test_input_not_mutated(self):
        a = [4, 1, 3, 1, 2]
        sort(a)
        assert a == [4, 1, 3, 1, 2]

    def test_accepts_tuple_range_and_generator(self):
        assert sort((3, 2, 1)) == [1, 2, 3]
        assert sort(range(5, 0, -1)) == [1, 2, 3, 4, 5]
        assert sort(x * x for x in (3, -1, 2)) == [1, 4, 9]

    def test_strings(self):
        assert sort("banana") == list("aaabnn")

    def test_idempotent(self):
        once = sort([8, 3, 3, 9, -2, 0])
        assert sort(once) == once

    def test_deep_sorted_input_does_not_hit_recursion_limit(self):
        ascending = list(range(2000))
        assert sort(ascending) == ascending
        assert sort(ascending[::-1]) == ascending

    def test_equal_keys_keep_input_order(self):
        # Not part of the contract, but the partition scheme happens to preserve it.
        class Key:
            def __init__(self, k, tag):
                self.k, self.tag = k, tag

            def __lt__(self, other):
                return self.k < other.k

            def __gt__(self, other):
                return self.k > other.k

            def __eq__(self, other):
                return self.k == other.k

        items = [Key(2, "a"), Key(1, "b"), Key(2, "c"), Key(1, "d")]
        assert [x.tag for x in sort(items)] == ["b", "d", "a", "c"]


class TestIncomparable:
    def test_mixed_types(self):
        with pytest.raises(IncomparableElementsError) as exc_info:
            sort([1, "a", 2])
        err = exc_info.value
        assert err.left == "a"
        assert err.right == 1
        assert isinstance(err.__cause__, TypeError)
        assert "non-comparable elements" in str(err)

    def test_is_type_error_and_package_error(self):
        with pytest.raises(TypeError):
            sort([None, 1])
        with pytest.raises(PivotsortError):
            sort([None, 1])

    def test_nan_is_rejected_not_silently_dropped(self):
        with pytest.raises(IncomparableElementsError):
            sort([1.0, float("nan"), 0.5])

    def test_nan_pivot(self):
        with pytest.raises(IncomparableElementsError):
            sort([float("nan"), 1.0])

    def test_single_nan_is_trivially_sorted(self):
        out = sort([float("nan")])
        assert len(out) == 1

    def test_incomparable_sets(self):
        # Subset order: neither {1} < {2}, {1} > {2} nor {1} == {2}
        with pytest.raises(IncomparableElementsError):
            sort([{1}, {2}])

    def test_error_found_in_nested_partition(self):
        # (1, 2) vs (1, "a") only compares the second fields once both
        # land in the `less` partition of (5,).
        with pytest.raises(IncomparableElementsError):
            sort([(5,), (1, 2), (1, "a")])

    def test_error_pickles(self):
        err = IncomparableElementsError(1, "a")
        clone = pickle.loads(pickle.dumps(err))
        assert isinstance(clone, IncomparableElementsError)
        assert (clone.left, clone.right) == (1, "a")
        assert str(clone) == str(err)


class TestPartition:
    def test_three_way_split(self):
        less, equal, greater = partition([3, 5, 1, 3, 2, 4, 3])
        assert less == [1, 2]
        assert equal == [3, 3, 3]
        assert greater == [5, 4]

    def test_single_element(self):
        assert partition([7]) == ([], [7], [])

    def test_partition_is_a_permutation(self):
        items = [9, 1, 9, 4, 12, 0, 9]
        less, equal, greater = partition(items)
        assert Counter(less + equal + greater) == Counter(items)
        assert all(x < 9 for x in less)
        assert all(x > 9 for x in greater)


class TestConfig:
    @pytest.mark.parametrize("config", [None, {}, {"parallel_threshold": None}])
    def test_sequential_configs(self, config):
        assert sort([3, 1, 2], config=config) == [1, 2, 3]

    @pytest.mark.parametrize(
        "config",
        [
            {"bogus": 1},
            {"parallel_threshold": 1},
            {"parallel_threshold": True},
            {"parallel_threshold": "10"},
            {"max_workers": 0},
            {"max_workers": 1.5},
        ],
    )
    def test_invalid_config(self, config):
        with pytest.raises(ValueError):
            sort([3, 1, 2], config=config)

    def test_config_must_be_dict(self):
        with pytest.raises(ValueError):
            sort([1], config=[("parallel_threshold", 2)])  # type: ignore[arg-type]


class TestParallel:
    def test_below_threshold_runs_sequentially(self):
        assert sort([2, 1], config={"parallel_threshold": 10}) == [1, 2]

    def test_matches_sequential(self):
        items = [(i * 7919) % 1000 for i in range(3000)]
        parallel = sort(items, config={"parallel_threshold": 100, "max_workers": 2})
        assert parallel == sort(items)
        assert parallel == sorted(items)

    def test_worker_error_propagates(self):
        with pytest.raises(IncomparableElementsError):
            sort([(5,), (1, 2), (1, "a")], config={"parallel_threshold": 2, "max_workers": 2})
