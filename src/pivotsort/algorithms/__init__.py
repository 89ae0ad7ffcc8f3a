"""
Sorting algorithms.

Every module in this package exposes the same entry point:
    sort(a, *, config: dict | None = None) -> list

Modules are looked up by name so experiment configs can refer to them:
    from pivotsort.algorithms import get_sort
    sort = get_sort("quicksort")
"""

from __future__ import annotations

import importlib
from typing import Any, Callable, List

ALGORITHMS = ("quicksort", "builtin_timsort")

__all__ = ["ALGORITHMS", "get_sort"]


def get_sort(name: str) -> Callable[..., List[Any]]:
    """
    Return the `sort` callable of `pivotsort.algorithms.<name>`.

    Raises
    ------
    ValueError
        If `name` is not a registered algorithm.
    AttributeError
        If the module does not define a callable `sort`.
    """
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {name!r}. Supported: {list(ALGORITHMS)}")

    mod = importlib.import_module(f"{__name__}.{name}")
    fn = getattr(mod, "sort", None)
    if not callable(fn):
        raise AttributeError(
            f"Algorithm module '{name}' must define a callable `sort(a, *, config=None)`"
        )
    return fn
