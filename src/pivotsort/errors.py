"""
Exception types raised by pivotsort.

Public API (stable):
    PivotsortError
    IncomparableElementsError
"""

from __future__ import annotations

from typing import Any

__all__ = ["PivotsortError", "IncomparableElementsError"]


class PivotsortError(Exception):
    """Base class for errors raised by this package."""


class IncomparableElementsError(PivotsortError, TypeError):
    """
    Two elements of the input cannot be ordered relative to each other.

    Raised both when the comparison itself fails (``1 < "a"``) and when it
    succeeds but establishes no order (``nan`` against anything, disjoint
    sets). Subclasses TypeError so callers catching the builtin sort's
    failure mode keep working.

    The offending pair is kept in ``left`` / ``right``. Both are passed to
    ``Exception.__init__`` so the error pickles cleanly across process
    boundaries.
    """

    def __init__(self, left: Any, right: Any) -> None:
        super().__init__(left, right)
        self.left = left
        self.right = right

    def __str__(self) -> str:
        return (
            f"non-comparable elements: {self.left!r} ({type(self.left).__name__}) "
            f"and {self.right!r} ({type(self.right).__name__})"
        )
