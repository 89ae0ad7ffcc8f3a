"""
Ground-truth oracle for sorting correctness: Python's built-in `sorted()`.

Public API (stable):
    ORACLE_NAME
    oracle_sort(a: Sequence[T]) -> list[T]
    equals_oracle(a: Sequence[T], out: Sequence[T]) -> bool

The oracle never mutates its input and always returns a new list. Every
algorithm in `pivotsort.algorithms` must match it exactly on totally
ordered inputs.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def oracle_sort(a: Sequence[T]) -> List[T]:
    """Return a new, sorted list with the elements of `a`."""
    return sorted(a)


def equals_oracle(a: Sequence[T], out: Sequence[T]) -> bool:
    """True iff `out` equals `oracle_sort(a)` element for element."""
    return list(out) == oracle_sort(a)
