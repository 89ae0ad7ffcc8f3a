"""
Timing harness for sorting algorithms.

Each sample times exactly one `algo_fn(a, config=...)` call with
`time.perf_counter_ns`. Copying, warmup and GC control all happen outside
the timed block.

Public API (stable):
    TimingResult
    time_sort_call(...) -> TimingResult

`TimingResult.to_dict()` schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns per completed sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # set when status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index of the timeout
    }
"""

from __future__ import annotations

import gc
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

__all__ = ["TimingResult", "time_sort_call"]

logger = logging.getLogger(__name__)


@dataclass
class TimingResult:
    algo: str
    repeats: int
    samples_ns: List[int] = field(default_factory=list)
    status: str = "ok"
    error: Optional[str] = None
    timed_out_on_repeat: Optional[int] = None
    # Output of the most recent successful call, for the runner's validation step.
    last_output: Optional[List[Any]] = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algo": self.algo,
            "repeats": self.repeats,
            "samples_ns": list(self.samples_ns),
            "status": self.status,
            "error": self.error,
            "timed_out_on_repeat": self.timed_out_on_repeat,
        }


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., List[Any]],
    a: List[Any],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    defensive_copy: bool,
) -> TimingResult:
    """
    Time repeated calls to `algo_fn(a, config=config)`.

    Parameters
    ----------
    algo_name : str
        Logical algorithm name, recorded in the result.
    algo_fn : Callable[..., list]
        sort(a, *, config: dict | None) -> list
    a : list
        Input. Algorithms must not mutate it.
    config : dict | None
        Passed through unchanged.
    repeats : int
        Number of timed samples.
    warmup : bool
        Make one untimed call first.
    disable_gc : bool
        Collect, then disable the GC for the timed loop. The previous GC
        state is restored afterwards.
    timeout_seconds : float
        Per-sample threshold. A slower sample sets status "timeout" and ends
        sampling; the slow sample itself is still recorded.
    defensive_copy : bool
        Pass a fresh copy of `a` to each call (copied outside the timer).

    Returns
    -------
    TimingResult
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result = TimingResult(algo=algo_name, repeats=repeats)

    if warmup and repeats > 0:
        try:
            result.last_output = algo_fn(list(a) if defensive_copy else a, config=config)
        except Exception as e:
            result.status = "error"
            result.error = f"warmup failed: {e!r}"
            logger.warning("%s: %s", algo_name, result.error)
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a) if defensive_copy else a
            try:
                t0 = time.perf_counter_ns()
                out = algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()
            except Exception as e:
                result.status = "error"
                result.error = f"run failed at repeat {r}: {e!r}"
                logger.warning("%s: %s", algo_name, result.error)
                break

            elapsed = t1 - t0
            result.samples_ns.append(elapsed)
            result.last_output = out

            if elapsed > threshold_ns:
                result.status = "timeout"
                result.timed_out_on_repeat = r
                logger.warning(
                    "%s: sample %d took %.3fs (> %.3fs timeout)",
                    algo_name,
                    r,
                    elapsed / 1e9,
                    timeout_seconds,
                )
                break
    finally:
        # Only re-enable what we disabled; a caller-disabled GC stays off.
        if disable_gc and prev_gc_enabled:
            gc.enable()

    logger.debug(
        "%s: status=%s samples=%d/%d", algo_name, result.status, len(result.samples_ns), repeats
    )
    return result
