"""
Property checks for sort outputs.

Used by the tests and by the benchmark runner's sanity validation step.

Public API (stable):
    is_nondecreasing(xs) -> bool
    first_nondecreasing_violation_index(xs) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    assert_no_mutation(before, after) -> None
    is_idempotent(sort_fn, a, config=None) -> bool
    check_sort_output(a, out) -> str | None

Notes
-----
- Elements only need `<=` for the order checks. The multiset checks use
  `collections.Counter`, so elements must also be hashable.
- Stability cannot be read off values alone; check it with tagged
  (key, id) pairs if it ever matters.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "is_idempotent",
    "check_sort_output",
]


def is_nondecreasing(xs: Sequence[Any]) -> bool:
    """Return True iff xs[i] <= xs[i+1] for all i."""
    return first_nondecreasing_violation_index(xs) is None


def first_nondecreasing_violation_index(xs: Sequence[Any]) -> Optional[int]:
    """
    Return the first index i where not (xs[i] <= xs[i+1]), or None.

    Written as a negated `<=` so partially ordered values (nan) count as
    violations.
    """
    for i in range(len(xs) - 1):
        if not xs[i] <= xs[i + 1]:
            return i
    return None


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """True iff `a` and `b` hold the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Map value -> (count in a) - (count in b), omitting zero entries.

    An empty dict means identical multiplicities.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: d for k, d in diff.items() if d != 0}


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """Raise AssertionError naming the first difference if `after` != `before`."""
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x is not y and x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x!r}, after={y!r}")


def is_idempotent(
    sort_fn: Callable[..., List[Any]],
    a: Sequence[Any],
    config: Optional[Dict[str, Any]] = None,
) -> bool:
    """True iff sort_fn(sort_fn(a)) == sort_fn(a)."""
    once = sort_fn(a, config=config)
    return sort_fn(once, config=config) == once


def check_sort_output(a: Sequence[Any], out: Sequence[Any]) -> Optional[str]:
    """
    Describe the first way `out` fails to be a sort of `a`, or return None.

    Checks, in order: length, multiset equality, nondecreasing order.
    """
    if len(out) != len(a):
        return f"length mismatch: input has {len(a)} elements, output has {len(out)}"

    diff = permutation_counter_diff(a, out)
    if diff:
        sample = dict(list(diff.items())[:5])
        return f"output is not a permutation of input (count diff sample: {sample})"

    i = first_nondecreasing_violation_index(out)
    if i is not None:
        return f"not nondecreasing at i={i}: {out[i]!r} > {out[i + 1]!r}"

    return None
