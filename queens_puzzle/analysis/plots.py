"""Visualization utilities for generation outputs.

Chart map
---------
- 01_hints_vs_N.png — Mean hint count (± std) vs N, one line per oracle.
    - What: How many queens must be revealed as the board grows.
- 02_time_vs_N_log_scale.png — Mean generation time vs N (log scale).
    - What: Practical cost of minimization per oracle (hardware dependent).
- 03_hint_ratio_vs_N.png — Mean share of the solution kept as hints vs N.
- 04_hint_distribution.png — Boxplot of hint counts per N, split by oracle.
    - What: Spread of the locally minimal hint counts across random solutions.

Charts are written as PNG files into ``out_dir`` with the same optional
suffix as the CSV exports.
"""
from __future__ import annotations

import os
from typing import List

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .reporting import build_suffix, runs_to_frame
from .stats import GenerationResults

_MARKERS = {"deduction": "o", "uniqueness": "s"}


def _series(results: GenerationResults, oracle: str, metric: str, stat: str) -> np.ndarray:
    by_n = results[oracle]
    return np.array(
        [by_n[n].get(metric, {}).get(stat) or 0.0 for n in sorted(by_n)],  # type: ignore[misc]
        dtype=float,
    )


def _sizes(results: GenerationResults) -> List[int]:
    return sorted({n for by_n in results.values() for n in by_n})


def plot_hints_vs_n(results: GenerationResults, out_dir: str) -> str:
    """Plot mean hint count with a ±1σ band for every oracle."""
    os.makedirs(out_dir, exist_ok=True)
    plt.figure(figsize=(12, 8))
    for oracle in sorted(results):
        sizes = np.array(sorted(results[oracle]))
        mean = _series(results, oracle, "hints", "mean")
        std = _series(results, oracle, "hints", "std")
        plt.plot(sizes, mean, marker=_MARKERS.get(oracle, "^"), linewidth=2, markersize=8, label=oracle)
        plt.fill_between(sizes, mean - std, mean + std, alpha=0.2)
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Hints (mean ± std)", fontsize=12)
    plt.title("Hint Count vs Board Size\n(Locally minimal hint sets)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(_sizes(results))

    fname = os.path.join(out_dir, f"01_hints_vs_N{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved hint-count chart: {fname}")
    return fname


def plot_time_vs_n(results: GenerationResults, out_dir: str) -> str:
    """Plot mean generation time per oracle on a log scale."""
    os.makedirs(out_dir, exist_ok=True)
    plt.figure(figsize=(12, 8))
    for oracle in sorted(results):
        sizes = np.array(sorted(results[oracle]))
        mean = np.maximum(_series(results, oracle, "time", "mean"), 1e-6)
        plt.semilogy(sizes, mean, marker=_MARKERS.get(oracle, "^"), linewidth=2, markersize=8, label=oracle)
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Average generation time [s] (log scale)", fontsize=12)
    plt.title("Generation Time vs Board Size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(_sizes(results))

    fname = os.path.join(out_dir, f"02_time_vs_N_log_scale{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved generation-time chart (log scale): {fname}")
    return fname


def plot_hint_ratio_vs_n(results: GenerationResults, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    plt.figure(figsize=(12, 8))
    for oracle in sorted(results):
        sizes = np.array(sorted(results[oracle]))
        ratio = _series(results, oracle, "hint_ratio", "mean")
        plt.plot(sizes, ratio, marker=_MARKERS.get(oracle, "^"), linewidth=2, markersize=8, label=oracle)
        for n, value in zip(sizes, ratio):
            plt.annotate(f"{value:.2f}", (n, value), textcoords="offset points", xytext=(0, 6), ha="center", fontsize=9)
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Hints / N", fontsize=12)
    plt.ylim(0, 1.05)
    plt.title("Share of Solution Revealed vs Board Size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(_sizes(results))

    fname = os.path.join(out_dir, f"03_hint_ratio_vs_N{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved hint-ratio chart: {fname}")
    return fname


def plot_hint_distribution(results: GenerationResults, out_dir: str) -> str:
    """Boxplot of per-run hint counts for each N, split by oracle."""
    os.makedirs(out_dir, exist_ok=True)
    frame = runs_to_frame(results)
    plt.figure(figsize=(14, 8))
    sns.boxplot(data=frame, x="n", y="hints", hue="oracle")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Hints", fontsize=12)
    plt.title("Hint Count Distribution\n(Boxplot shows median, quartiles, outliers)", fontsize=14)
    plt.grid(True, alpha=0.3)

    fname = os.path.join(out_dir, f"04_hint_distribution{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved hint-distribution chart: {fname}")
    return fname


def plot_comprehensive_analysis(results: GenerationResults, out_dir: str) -> List[str]:
    """Generate every chart for ``results``; returns the written paths."""
    if not results:
        print("No results to plot")
        return []
    return [
        plot_hints_vs_n(results, out_dir),
        plot_time_vs_n(results, out_dir),
        plot_hint_ratio_vs_n(results, out_dir),
        plot_hint_distribution(results, out_dir),
    ]
