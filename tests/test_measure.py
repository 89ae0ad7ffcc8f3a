"""Tests for the timing harness."""

from __future__ import annotations

import gc
import time

import pytest

from pivotsort.algorithms.quicksort import sort
from pivotsort.bench.measure import TimingResult, time_sort_call


def _call(algo_fn, a, **overrides):
    kwargs = dict(
        algo_name="algo",
        algo_fn=algo_fn,
        a=a,
        config=None,
        repeats=3,
        warmup=True,
        disable_gc=False,
        timeout_seconds=10.0,
        defensive_copy=True,
    )
    kwargs.update(overrides)
    return time_sort_call(**kwargs)


def test_ok_run_collects_samples():
    res = _call(sort, [3, 1, 2])
    assert isinstance(res, TimingResult)
    assert res.ok
    assert len(res.samples_ns) == 3
    assert all(isinstance(t, int) and t >= 0 for t in res.samples_ns)
    assert res.last_output == [1, 2, 3]


def test_to_dict_schema():
    d = _call(sort, [2, 1], algo_name="quicksort").to_dict()
    assert set(d) == {"algo", "repeats", "samples_ns", "status", "error", "timed_out_on_repeat"}
    assert d["algo"] == "quicksort"
    assert d["status"] == "ok"


def test_defensive_copy_gives_fresh_input():
    seen = []

    def recording(a, *, config=None):
        seen.append(a)
        return sorted(a)

    base = [2, 1]
    _call(recording, base, warmup=False)
    assert all(x is not base for x in seen)

    seen.clear()
    _call(recording, base, warmup=False, defensive_copy=False)
    assert all(x is base for x in seen)


def test_timeout_stops_sampling():
    def slow(a, *, config=None):
        time.sleep(0.02)
        return sorted(a)

    res = _call(slow, [1], warmup=False, repeats=5, timeout_seconds=0.001)
    assert res.status == "timeout"
    assert res.timed_out_on_repeat == 0
    assert len(res.samples_ns) == 1


def test_error_during_run():
    res = _call(sort, [1, "a"], warmup=False)
    assert res.status == "error"
    assert "run failed at repeat 0" in res.error
    assert "IncomparableElementsError" in res.error
    assert res.samples_ns == []


def test_error_during_warmup():
    res = _call(sort, [1, "a"], warmup=True)
    assert res.status == "error"
    assert res.error.startswith("warmup failed")


def test_gc_state_restored():
    assert gc.isenabled()
    _call(sort, [3, 2, 1], disable_gc=True)
    assert gc.isenabled()


def test_zero_repeats():
    res = _call(sort, [1, 2], repeats=0)
    assert res.ok
    assert res.samples_ns == []
    assert res.last_output is None


@pytest.mark.parametrize("overrides", [{"repeats": -1}, {"timeout_seconds": 0}])
def test_invalid_arguments(overrides):
    with pytest.raises(ValueError):
        _call(sort, [1], **overrides)
