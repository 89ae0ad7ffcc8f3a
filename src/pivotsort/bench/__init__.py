"""
Benchmarking: timing harness, experiment config and the sweep runner.

    from pivotsort.bench import run_experiment, time_sort_call
"""

from .config import ExperimentConfig, load_config
from .measure import TimingResult, time_sort_call
from .runner import run_experiment

__all__ = [
    "ExperimentConfig",
    "load_config",
    "TimingResult",
    "time_sort_call",
    "run_experiment",
]
