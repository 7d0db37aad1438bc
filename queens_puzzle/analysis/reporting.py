"""CSV export utilities for generation outputs (aggregates and raw runs).

These helpers materialize concise per-size summaries as well as full per-run
raw data for downstream analysis or spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import List

import pandas as pd

from . import settings
from .stats import METRICS, GenerationResults


def build_suffix() -> str:
    """Build an optional filename suffix from ``RUN_TAG`` and ``RUN_ID``."""
    parts: List[str] = []
    if settings.RUN_TAG:
        parts.append(str(settings.RUN_TAG))
    if settings.DATE_IN_FILENAMES and settings.RUN_ID:
        parts.append(str(settings.RUN_ID))
    return ("_" + "_".join(parts)) if parts else ""


def save_summary_to_csv(results: GenerationResults, out_dir: str) -> str:
    """Write per-(oracle, n) aggregate metrics to CSV and return the path.

    Columns follow lowercase snake_case: ``<metric>_mean``, ``<metric>_median``,
    ``<metric>_std``, ``<metric>_min`` and ``<metric>_max`` for every metric.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"summary{build_suffix()}.csv")

    header = ["oracle", "n", "total_runs", "unique_rate"]
    for metric in METRICS:
        header.extend(f"{metric}_{stat}" for stat in ("mean", "median", "std", "min", "max"))

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for oracle in sorted(results):
            for n in sorted(results[oracle]):
                entry = results[oracle][n]
                row = [oracle, n, entry.get("total_runs", 0), entry.get("unique_rate", 0.0)]
                for metric in METRICS:
                    stats = entry.get(metric, {})  # type: ignore[misc]
                    row.extend(stats.get(stat) for stat in ("mean", "median", "std", "min", "max"))
                writer.writerow(row)

    print(f"Saved summary CSV: {filename}")
    return filename


def save_raw_runs_to_csv(results: GenerationResults, out_dir: str) -> str:
    """Write one CSV row per generated puzzle and return the path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs{build_suffix()}.csv")

    fields = [
        "oracle",
        "n",
        "run",
        "seed",
        "hints",
        "hint_ratio",
        "solver_nodes",
        "solver_time",
        "minimize_time",
        "time",
        "completions",
    ]
    with open(filename, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fields)
        writer.writeheader()
        for oracle in sorted(results):
            for n in sorted(results[oracle]):
                for record in results[oracle][n].get("raw_runs", []):
                    writer.writerow({key: record[key] for key in fields})  # type: ignore[literal-required]

    print(f"Saved raw runs CSV: {filename}")
    return filename


def runs_to_frame(results: GenerationResults) -> pd.DataFrame:
    """Flatten all raw runs into a DataFrame (one row per puzzle)."""
    rows = [
        dict(record)
        for oracle in sorted(results)
        for n in sorted(results[oracle])
        for record in results[oracle][n].get("raw_runs", [])
    ]
    columns = ["oracle", "n", "run", "seed", "completions"] + METRICS
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows)[columns].sort_values(["oracle", "n", "run"]).reset_index(drop=True)
