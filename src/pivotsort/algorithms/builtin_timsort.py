"""
Baseline: Python's built-in `sorted()` behind the common algorithm signature.

Used as the reference point in benchmarks. Accepts no config keys.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, TypeVar

from pivotsort.errors import IncomparableElementsError

T = TypeVar("T")

__all__ = ["sort"]


def sort(a: Iterable[T], *, config: Optional[Dict[str, Any]] = None) -> List[T]:
    """Return `sorted(a)`; TypeError is reported as IncomparableElementsError."""
    if config:
        raise ValueError(f"builtin_timsort takes no config; got keys {sorted(config)}")

    items = list(a)
    try:
        return sorted(items)
    except TypeError as e:
        left, right = _first_incomparable_pair(items)
        raise IncomparableElementsError(left, right) from e


def _first_incomparable_pair(items: List[Any]) -> tuple:
    # The builtin does not say which pair failed; find one for the message.
    for i in range(len(items) - 1):
        for j in range(i + 1, len(items)):
            try:
                items[i] < items[j]
                items[j] < items[i]
            except TypeError:
                return items[i], items[j]
    return None, None
