"""
Input generators for sort benchmarks and tests.

Distributions (spec = {"dist": name, "params": {...}}):
- "random":        uniform ints, params["range"] == [lo, hi] (inclusive, required)
- "nearly_sorted": [0..n-1] with ceil(swap_frac * n) random pair swaps
                   (params["swap_frac"] in [0, 1], default 0.05)
- "few_uniques":   ints drawn from min(k, n, span) distinct values
                   (params["k"] >= 1 required, optional inclusive "range",
                   default [0, 4294967295])
- "small_range":   uniform ints over a small domain, default [0, 255]; either
                   params["range"] or params["min_val"] / params["max_val"]
- "reversed":      [n-1, ..., 0]; params and rng unused
- "sorted":        [0, ..., n-1]; params and rng unused
- "floats":        uniform floats in [lo, hi), params["range"] optional,
                   default [0.0, 1.0]

"reversed" and "sorted" are the worst cases for a first-element pivot.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list
    SUPPORTED_DISTS

Results are plain Python lists so algorithms stay NumPy-agnostic. The caller
owns and seeds the RNG.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Tuple

import numpy as np

__all__ = ["SUPPORTED_DISTS", "make_dataset"]

logger = logging.getLogger(__name__)

_Generator = Callable[[int, Dict[str, Any], np.random.Generator], List[Any]]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[Any]:
    """
    Generate a dataset of length `n` according to `spec`.

    Parameters
    ----------
    n : int
        Number of elements, >= 0.
    spec : dict
        {"dist": <one of SUPPORTED_DISTS>, "params": {...}}; "params" may be
        omitted for distributions that need none.
    rng : numpy.random.Generator
        Seeded upstream by the caller.

    Returns
    -------
    list
        `n` ints (floats for "floats").

    Raises
    ------
    ValueError
        On invalid `n`, unknown dist, or malformed params.
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist")
    gen = _GENERATORS.get(dist)  # type: ignore[arg-type]
    if gen is None:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict")

    out = gen(n, params, rng)
    logger.debug("generated dataset dist=%s n=%d", dist, n)
    return out


# ------------------------- distributions ------------------------- #


def _random(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    if "range" not in params:
        raise ValueError("random.params.range must be provided as [min, max] (inclusive)")
    lo, hi = _parse_int_range(params["range"], "random")
    if n == 0:
        return []
    # Generator.integers is half-open; +1 makes hi inclusive.
    return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()


def _nearly_sorted(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    swap_frac = _parse_swap_frac(params)
    arr = list(range(n))
    num_swaps = math.ceil(swap_frac * n)
    if num_swaps == 0:
        return arr

    idxs = rng.integers(0, n, size=(num_swaps, 2))
    for i, j in idxs.tolist():
        # i == j is a no-op, so the effective number of swaps may be lower.
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def _few_uniques(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    k = params.get("k")
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    lo, hi = _parse_int_range(params.get("range", (0, 4294967295)), "few_uniques")
    if n == 0:
        return []

    actual_k = min(k, n, hi - lo + 1)

    # Draw distinct values from `rng` itself (not the random module) so the
    # output depends only on the caller's seed.
    chosen: List[int] = []
    seen = set()
    while len(chosen) < actual_k:
        need = actual_k - len(chosen)
        for v in rng.integers(lo, hi + 1, size=2 * need).tolist():
            if v not in seen:
                seen.add(v)
                chosen.append(v)
                if len(chosen) == actual_k:
                    break

    return [chosen[t] for t in rng.integers(0, actual_k, size=n).tolist()]


def _small_range(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    if "range" in params:
        lo, hi = _parse_int_range(params["range"], "small_range")
    else:
        lo_raw = params.get("min_val", 0)
        hi_raw = params.get("max_val", 255)
        if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
            raise ValueError("small_range.params.min_val/max_val must be integers")
        lo, hi = int(lo_raw), int(hi_raw)
        if lo > hi:
            raise ValueError(f"small_range invalid: min > max ({lo} > {hi})")
    if n == 0:
        return []
    return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()


def _reversed(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return list(range(n - 1, -1, -1))


def _sorted(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    return list(range(n))


def _floats(n: int, params: Dict[str, Any], rng: np.random.Generator) -> List[float]:
    spec = params.get("range", (0.0, 1.0))
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("floats.params.range must be a 2-element list/tuple [min, max]")
    try:
        lo, hi = float(spec[0]), float(spec[1])
    except (TypeError, ValueError) as e:
        raise ValueError(f"floats.params.range values must be numbers; got {spec!r}") from e
    if not (math.isfinite(lo) and math.isfinite(hi)) or lo >= hi:
        raise ValueError(f"floats.params.range invalid: need finite min < max; got [{lo}, {hi}]")
    if n == 0:
        return []
    return rng.uniform(lo, hi, size=n).tolist()


_GENERATORS: Dict[str, _Generator] = {
    "random": _random,
    "nearly_sorted": _nearly_sorted,
    "few_uniques": _few_uniques,
    "small_range": _small_range,
    "reversed": _reversed,
    "sorted": _sorted,
    "floats": _floats,
}

SUPPORTED_DISTS = frozenset(_GENERATORS)


# ------------------------- helpers ------------------------- #


def _parse_int_range(spec: Any, dist: str) -> Tuple[int, int]:
    """Validate an inclusive [lo, hi] integer range."""
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError(f"{dist}.params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not 0.0 <= x <= 1.0:
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x


def _is_int_like(x: Any) -> bool:
    # Python ints and NumPy integer scalars; bool is excluded
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
