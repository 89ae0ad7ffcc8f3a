"""
pivotsort: first-element-pivot three-way quicksort plus tooling to validate
and benchmark it.

Usage:
    from pivotsort import sort, IncomparableElementsError

    sort([3, 1, 2])                                   # [1, 2, 3]
    sort(data, config={"parallel_threshold": 50_000})  # split top level across processes
"""

from .algorithms.quicksort import sort
from .errors import IncomparableElementsError, PivotsortError

__version__ = "0.1.0"
__all__ = [
    "sort",
    "IncomparableElementsError",
    "PivotsortError",
]
