"""
Experiment configuration: YAML file -> validated ExperimentConfig.

Example (experiments/configs/01_random_scaling.yaml):

    experiment_name: random_scaling
    output_dir: experiments/runs
    seed: 12345
    repeats: 5
    warmup: true
    disable_gc: true
    timeout_seconds: 10.0
    validate: true                  # optional, default true
    dataset:
      dist: random
      params: {range: [0, 1000000]}
    sizes: [1000, 10000, 100000]
    algorithms:
      - name: quicksort
      - name: quicksort
        label: quicksort_parallel   # optional; defaults to name
        config: {parallel_threshold: 50000}
      - name: builtin_timsort

Public API (stable):
    REQUIRED_KEYS
    AlgoSpec
    ExperimentConfig
    load_config(path) -> ExperimentConfig
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from pivotsort.algorithms import get_sort
from pivotsort.datasets import SUPPORTED_DISTS

__all__ = ["REQUIRED_KEYS", "AlgoSpec", "ExperimentConfig", "load_config"]

REQUIRED_KEYS = (
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
)


@dataclass(frozen=True)
class AlgoSpec:
    name: str
    label: str
    config: Dict[str, Any] = field(default_factory=dict)

    def resolve(self):
        """Return the algorithm's `sort` callable."""
        return get_sort(self.name)


@dataclass(frozen=True)
class ExperimentConfig:
    experiment_name: str
    output_dir: Path
    seed: int
    repeats: int
    warmup: bool
    disable_gc: bool
    timeout_seconds: float
    dataset: Dict[str, Any]
    sizes: Tuple[int, ...]
    algorithms: Tuple[AlgoSpec, ...]
    validate: bool = True

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "ExperimentConfig":
        if not isinstance(cfg, dict):
            raise ValueError("Experiment config must be a mapping at the top level")

        missing = [k for k in REQUIRED_KEYS if k not in cfg]
        if missing:
            raise ValueError(f"Missing required config keys: {missing}")

        sizes = cfg["sizes"]
        if not isinstance(sizes, list) or not sizes:
            raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
        for n in sizes:
            if not isinstance(n, int) or isinstance(n, bool) or n < 0:
                raise ValueError(f"Config 'sizes' entries must be nonnegative integers; got {n!r}")

        repeats = int(cfg["repeats"])
        if repeats < 1:
            raise ValueError(f"Config 'repeats' must be >= 1; got {repeats}")

        timeout_seconds = float(cfg["timeout_seconds"])
        if timeout_seconds <= 0:
            raise ValueError(f"Config 'timeout_seconds' must be positive; got {timeout_seconds}")

        dataset = cfg["dataset"]
        if not isinstance(dataset, dict) or dataset.get("dist") not in SUPPORTED_DISTS:
            raise ValueError(
                f"Config 'dataset' must be a mapping with 'dist' in {sorted(SUPPORTED_DISTS)}"
            )

        return cls(
            experiment_name=str(cfg["experiment_name"]),
            output_dir=Path(cfg["output_dir"]),
            seed=int(cfg["seed"]),
            repeats=repeats,
            warmup=bool(cfg["warmup"]),
            disable_gc=bool(cfg["disable_gc"]),
            timeout_seconds=timeout_seconds,
            dataset=dict(dataset),
            sizes=tuple(sizes),
            algorithms=tuple(_parse_algorithms(cfg["algorithms"])),
            validate=bool(cfg.get("validate", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form, suitable for yaml.safe_dump."""
        return {
            "experiment_name": self.experiment_name,
            "output_dir": str(self.output_dir),
            "seed": self.seed,
            "repeats": self.repeats,
            "warmup": self.warmup,
            "disable_gc": self.disable_gc,
            "timeout_seconds": self.timeout_seconds,
            "validate": self.validate,
            "dataset": self.dataset,
            "sizes": list(self.sizes),
            "algorithms": [
                {"name": a.name, "label": a.label, "config": a.config} for a in self.algorithms
            ],
        }


def load_config(path: Path) -> ExperimentConfig:
    with Path(path).open("r", encoding="utf-8") as f:
        return ExperimentConfig.from_dict(yaml.safe_load(f))


def _parse_algorithms(entries: Any) -> List[AlgoSpec]:
    if not isinstance(entries, list) or not entries:
        raise ValueError("Config 'algorithms' must be a non-empty list")

    specs: List[AlgoSpec] = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"Each algorithm entry must be a mapping; got {entry!r}")

        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        label = entry.get("label") or name
        if label in seen:
            raise ValueError(f"Duplicate algorithm label in config: {label}")
        seen.add(label)

        config = entry.get("config") or {}
        if not isinstance(config, dict):
            raise ValueError(f"Algorithm '{label}': 'config' must be a dict if provided")

        # Fail on unknown names at load time rather than mid-run.
        get_sort(name)
        specs.append(AlgoSpec(name=name, label=str(label), config=dict(config)))
    return specs
