"""
Experiment runner: one benchmarking sweep driven by a YAML config.

Usage (from repo root):
    python -m pivotsort.bench.runner experiments/configs/01_random_scaling.yaml
    pivotsort-bench experiments/configs/02_worst_case.yaml --log-level INFO

Outputs in a new run directory <output_dir>/<timestamp>_<experiment_name>/:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one line per timing sample + one per failed outcome
    - summary.csv             # median + IQR per (algo, n)

Design notes:
- One dataset per size; every algorithm gets the same input.
- With `validate` on, the last output of each algorithm is checked against
  the input; a bad sort is recorded as status "invalid".
- After a timeout, error or invalid output an algorithm is skipped for all
  larger sizes.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
import platform
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from pivotsort.bench.config import ExperimentConfig, load_config
from pivotsort.bench.measure import time_sort_call
from pivotsort.datasets import make_dataset
from pivotsort.validate import check_sort_output

__all__ = ["run_experiment", "main"]

logger = logging.getLogger(__name__)

_console = Console()

SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- helpers: IO & meta ------------------------- #


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = base_dir / f"{stamp}_{experiment_name}"
    # Two runs in the same second get a numeric suffix.
    suffix = 1
    while run_dir.exists():
        run_dir = base_dir / f"{stamp}_{experiment_name}_{suffix}"
        suffix += 1
    run_dir.mkdir()
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip() or None


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


# ------------------------- aggregation & display ------------------------- #


def _iqr(s: pd.Series) -> float:
    return s.quantile(0.75) - s.quantile(0.25)


def aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    """Median / IQR / min / max of successful samples per (algo, n)."""
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True, convert_dates=False)
    # Status lines carry no time_ns
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    out = df.groupby(["algo", "n"], as_index=False).agg(
        samples_ok=("time_ns", "count"),
        median_ns=("time_ns", "median"),
        iqr_ns=("time_ns", _iqr),
        min_ns=("time_ns", "min"),
        max_ns=("time_ns", "max"),
    )
    out[["n", "median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[
        ["n", "median_ns", "iqr_ns", "min_ns", "max_ns"]
    ].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")

    # first / middle / last size, deduplicated
    picks = list(dict.fromkeys([sizes[0], sizes[len(sizes) // 2], sizes[-1]]))
    for n in picks:
        table.add_column(f"n={n}", justify="right")

    for algo in summary["algo"].unique():
        row = [str(algo)]
        for n in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == n)]
            if s.empty:
                row.append("—")
            else:
                median_ms = int(s["median_ns"].iloc[0]) / 1e6
                iqr_ms = int(s["iqr_ns"].iloc[0]) / 1e6
                row.append(f"{median_ms:.2f} ± {iqr_ms:.2f}")
        table.add_row(*row)

    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #


def run_experiment(config_path: Path) -> Path:
    """Run the sweep described by `config_path`; return the run directory."""
    cfg: ExperimentConfig = load_config(config_path)

    run_dir = _ensure_run_dir(cfg.output_dir, cfg.experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    with cfg_resolved_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(cfg.to_dict(), f, sort_keys=False)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    sort_fns = {a.label: a.resolve() for a in cfg.algorithms}
    skipped = {a.label: False for a in cfg.algorithms}
    rng = np.random.default_rng(cfg.seed)

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {cfg.experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.label for a in cfg.algorithms)}")
    _console.print()

    for n in tqdm(cfg.sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(n, cfg.dataset, rng)

        for spec in cfg.algorithms:
            if skipped[spec.label]:
                logger.debug("%s: skipped at n=%d after earlier failure", spec.label, n)
                continue

            res = time_sort_call(
                algo_name=spec.label,
                algo_fn=sort_fns[spec.label],
                a=base_a,
                config=spec.config,
                repeats=cfg.repeats,
                warmup=cfg.warmup,
                disable_gc=cfg.disable_gc,
                timeout_seconds=cfg.timeout_seconds,
                defensive_copy=True,
            )

            for trial_idx, t_ns in enumerate(res.samples_ns):
                _append_jsonl(
                    {
                        "algo": spec.label,
                        "n": n,
                        "dataset": cfg.dataset,
                        "trial": trial_idx,
                        "time_ns": t_ns,
                        "config": spec.config,
                    },
                    results_path,
                )

            status_line: Optional[Dict[str, Any]] = None
            if res.status == "timeout":
                status_line = {"status": "timeout", "timed_out_on_repeat": res.timed_out_on_repeat}
            elif res.status == "error":
                status_line = {"status": "error", "error": res.error}
            elif cfg.validate and res.last_output is not None:
                problem = check_sort_output(base_a, res.last_output)
                if problem is not None:
                    logger.warning("%s: invalid output at n=%d: %s", spec.label, n, problem)
                    status_line = {"status": "invalid", "error": problem}

            if status_line is not None:
                skipped[spec.label] = True
                logger.warning(
                    "%s: %s at n=%d; skipping larger sizes", spec.label, status_line["status"], n
                )
                _append_jsonl(
                    {"algo": spec.label, "n": n, **status_line, "config": spec.config},
                    results_path,
                )

    summary_df = aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    _print_summary(summary_df, list(cfg.sizes))
    _console.print("[bold green]Done.[/bold green] Wrote:")
    for p in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {p}")

    return run_dir


# ------------------------- CLI ------------------------- #


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sorting benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
