"""
Three-way partitioning quicksort with a first-element pivot.

Algorithm:
    1. Sequences of length 0 or 1 are already sorted.
    2. The first element is the pivot.
    3. Every element is placed in `less` (< pivot), `equal` (== pivot, pivot
       included) or `greater` (> pivot).
    4. `less` and `greater` are sorted the same way.
    5. Result is sorted(less) + equal + sorted(greater).

Public API (stable):
    sort(a: Iterable[T], *, config: dict | None = None) -> list[T]
    partition(items: Sequence[T]) -> tuple[list[T], list[T], list[T]]

Config keys:
    parallel_threshold : int >= 2 or None (default None)
        Inputs at least this long sort their top-level `less` / `greater`
        partitions in two worker processes. Elements must be picklable.
    max_workers : int >= 1 or None (default None)
        Passed to ProcessPoolExecutor.

Notes
-----
- The input is never mutated; the result is always a new list.
- Always taking the first element as pivot makes already-sorted and
  reverse-sorted inputs the worst case: O(n) nesting and O(n^2) comparisons.
  Nesting lives on an explicit work stack rather than the Python call stack,
  so those inputs are slow but never hit the recursion limit.
- Equal elements come out in their original relative order, though callers
  should not rely on stability.
"""

from __future__ import annotations

import itertools
import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from pivotsort.errors import IncomparableElementsError

T = TypeVar("T")

CONFIG_KEYS = frozenset({"parallel_threshold", "max_workers"})

__all__ = ["CONFIG_KEYS", "sort", "partition"]

logger = logging.getLogger(__name__)


def sort(a: Iterable[T], *, config: Optional[Dict[str, Any]] = None) -> List[T]:
    """
    Return a new list with the elements of `a` in nondecreasing order.

    Parameters
    ----------
    a : iterable
        Finite collection of mutually comparable elements. Non-sequence
        iterables are consumed once.
    config : dict | None
        See module docstring for supported keys.

    Returns
    -------
    list
        A permutation of `a`, sorted.

    Raises
    ------
    IncomparableElementsError
        If two elements cannot be ordered relative to each other.
    ValueError
        If `config` contains unknown keys or invalid values.
    """
    threshold, max_workers = _parse_config(config)
    items = list(a)

    if threshold is not None and len(items) >= threshold:
        return _sort_parallel(items, max_workers)
    return _sort_sequential(items)


def partition(items: Sequence[T]) -> Tuple[List[T], List[T], List[T]]:
    """
    Split `items` around its first element.

    Returns (less, equal, greater). `equal` always starts with the pivot.
    `items` must be non-empty.
    """
    pivot = items[0]
    less: List[T] = []
    equal: List[T] = [pivot]
    greater: List[T] = []

    for x in itertools.islice(items, 1, None):
        try:
            if x < pivot:
                less.append(x)
            elif x > pivot:
                greater.append(x)
            elif x == pivot:
                equal.append(x)
            else:
                # None of <, >, == holds: a partial order (nan, sets, ...)
                raise IncomparableElementsError(x, pivot)
        except IncomparableElementsError:
            raise
        except TypeError as e:
            raise IncomparableElementsError(x, pivot) from e

    return less, equal, greater


# ------------------------- helpers ------------------------- #


def _sort_sequential(items: List[T]) -> List[T]:
    out: List[T] = []
    # (already_sorted, chunk); pushed greater-first so `less` is emitted first.
    stack: List[Tuple[bool, List[T]]] = [(False, items)]

    while stack:
        done, chunk = stack.pop()
        if done or len(chunk) <= 1:
            out.extend(chunk)
            continue

        less, equal, greater = partition(chunk)
        if greater:
            stack.append((False, greater))
        stack.append((True, equal))
        if less:
            stack.append((False, less))

    return out


def _sort_parallel(items: List[T], max_workers: Optional[int]) -> List[T]:
    less, equal, greater = partition(items)
    logger.debug(
        "parallel quicksort: n=%d less=%d equal=%d greater=%d max_workers=%s",
        len(items),
        len(less),
        len(equal),
        len(greater),
        max_workers,
    )

    with ProcessPoolExecutor(max_workers=max_workers) as pool:
        fut_less = pool.submit(_sort_sequential, less)
        fut_greater = pool.submit(_sort_sequential, greater)
        # .result() re-raises worker exceptions (IncomparableElementsError included)
        return fut_less.result() + equal + fut_greater.result()


def _parse_config(config: Optional[Dict[str, Any]]) -> Tuple[Optional[int], Optional[int]]:
    if config is None:
        return None, None
    if not isinstance(config, dict):
        raise ValueError("quicksort config must be a dict or None")

    unknown = set(config) - CONFIG_KEYS
    if unknown:
        raise ValueError(
            f"Unknown quicksort config keys: {sorted(unknown)}. Supported: {sorted(CONFIG_KEYS)}"
        )

    threshold = config.get("parallel_threshold")
    if threshold is not None and (not _is_plain_int(threshold) or threshold < 2):
        raise ValueError(
            f"quicksort.config.parallel_threshold must be an integer >= 2 or null; got {threshold!r}"
        )

    max_workers = config.get("max_workers")
    if max_workers is not None and (not _is_plain_int(max_workers) or max_workers < 1):
        raise ValueError(
            f"quicksort.config.max_workers must be an integer >= 1 or null; got {max_workers!r}"
        )

    return threshold, max_workers


def _is_plain_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)
