"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for generation outputs and provides utilities
to compute aggregate statistics across per-run records.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class GenerationRecord(TypedDict):
    n: int
    oracle: str
    run: int
    seed: Optional[int]
    hints: int
    hint_ratio: float
    solver_nodes: int
    solver_time: float
    minimize_time: float
    time: float
    completions: int


class SizeSummary(TypedDict, total=False):
    total_runs: int
    hints: StatsSummary
    hint_ratio: StatsSummary
    solver_nodes: StatsSummary
    solver_time: StatsSummary
    minimize_time: StatsSummary
    time: StatsSummary
    unique_rate: float
    raw_runs: List[GenerationRecord]


# oracle -> n -> summary
GenerationResults = Dict[str, Dict[int, SizeSummary]]

METRICS = ["hints", "hint_ratio", "solver_nodes", "solver_time", "minimize_time", "time"]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps expected. Values <= 0 are coerced to 1.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th and 75th
    percentiles (q25, q75) and range. When ``values`` is empty, all numeric
    fields are ``None`` and ``count`` is 0 to keep CSV generation consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)
    min_val = sorted_vals[0]
    max_val = sorted_vals[-1]

    return {
        "count": n,
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std": statistics.pstdev(values) if n > 1 else 0,
        "min": min_val,
        "max": max_val,
        "q25": sorted_vals[n // 4] if n >= 4 else min_val,
        "q75": sorted_vals[3 * n // 4] if n >= 4 else max_val,
        "range": max_val - min_val,
    }


def summarize_runs(runs: List[GenerationRecord]) -> SizeSummary:
    """Aggregate per-run records of one (oracle, n) pair.

    ``unique_rate`` is the share of puzzles whose final hints admit exactly
    one completion.
    """
    summary: SizeSummary = {"total_runs": len(runs), "raw_runs": list(runs)}
    for metric in METRICS:
        summary[metric] = compute_detailed_statistics([float(r[metric]) for r in runs])  # type: ignore[literal-required]
    summary["unique_rate"] = (
        sum(1 for r in runs if r["completions"] == 1) / len(runs) if runs else 0.0
    )
    return summary
