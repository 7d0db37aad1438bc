"""Batch puzzle-generation runners (sequential and parallel).

These routines generate repeatable batches of puzzles for a set of board
sizes and oracles and measure solver effort, minimizer time and hint counts.
Each run owns a ``random.Random`` seeded from ``(base_seed, n, run)``, so the
same run index at the same size starts from the same full solution for every
oracle and results do not depend on scheduling.

Outputs are structured dictionaries suitable for CSV export and plotting.
Validation hooks optionally check every generated puzzle.
"""
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Dict, List, Optional, Tuple

from . import settings
from .stats import GenerationRecord, GenerationResults, ProgressPrinter, summarize_runs
from queens_puzzle.backtracking import solve_with_stats
from queens_puzzle.generator import generate_puzzle, get_oracle, is_locally_minimal
from queens_puzzle.uniqueness import count_completions
from queens_puzzle.utils import is_full_solution

RunParams = Tuple[int, str, int, Optional[int], int, bool]


def run_seed(base_seed: Optional[int], n: int, run: int) -> Optional[int]:
    """Derive the seed of a single run, or None for nondeterministic runs."""
    if base_seed is None:
        return None
    return base_seed + n * 1000 + run


def validate_puzzle(n: int, oracle: str, solution, hints, max_iterations: int) -> None:
    """Raise ``AssertionError`` if a generated puzzle breaks any guarantee."""
    if not is_full_solution(solution, n):
        raise AssertionError(f"Invalid solution for n={n}: {solution}")
    if not set(hints) <= set(solution):
        raise AssertionError(f"Hints {hints} are not a subset of solution {solution}")
    accepts = get_oracle(oracle, max_iterations)
    if not accepts(n, hints):
        raise AssertionError(f"Oracle {oracle} rejects its own hints for n={n}: {hints}")
    if not is_locally_minimal(n, hints, accepts):
        raise AssertionError(f"Hints are not locally minimal for n={n} ({oracle}): {hints}")


def run_single_generation(params: RunParams) -> GenerationRecord:
    """Worker wrapper to generate and measure a single puzzle (for parallel mapping)."""
    n, oracle, run, seed, max_iterations, validate = params
    rng = random.Random(seed)

    start = perf_counter()
    solution, nodes, solver_time = solve_with_stats(n, rng)
    if solution is None:
        raise ValueError(f"No N-Queens placement exists for n={n}")
    minimize_start = perf_counter()
    puzzle = generate_puzzle(n, oracle=oracle, rng=rng, solution=solution, max_iterations=max_iterations)
    minimize_time = perf_counter() - minimize_start
    elapsed = perf_counter() - start

    if validate:
        validate_puzzle(n, oracle, puzzle.solution, puzzle.hints, max_iterations)

    return {
        "n": n,
        "oracle": puzzle.oracle,
        "run": run,
        "seed": seed,
        "hints": len(puzzle.hints),
        "hint_ratio": len(puzzle.hints) / n,
        "solver_nodes": nodes,
        "solver_time": solver_time,
        "minimize_time": minimize_time,
        "time": elapsed,
        "completions": count_completions(n, puzzle.hints, settings.COMPLETION_LIMIT, max_iterations),
    }


def _build_params(
    sizes: List[int],
    runs: int,
    oracles: List[str],
    seed: Optional[int],
    max_iterations: int,
    validate: bool,
) -> List[RunParams]:
    params: List[RunParams] = []
    for oracle in oracles:
        get_oracle(oracle)  # fail fast on unknown labels
        for n in sizes:
            settings.validate_board_size(n)
            for run in range(runs):
                params.append((n, oracle.lower(), run, run_seed(seed, n, run), max_iterations, validate))
    return params


def _collect(records: List[GenerationRecord]) -> GenerationResults:
    grouped: Dict[str, Dict[int, List[GenerationRecord]]] = {}
    for record in records:
        grouped.setdefault(record["oracle"], {}).setdefault(record["n"], []).append(record)
    return {
        oracle: {n: summarize_runs(runs) for n, runs in sorted(by_n.items())}
        for oracle, by_n in grouped.items()
    }


def run_generation_experiments(
    sizes: List[int],
    runs: int,
    oracles: List[str],
    seed: Optional[int] = None,
    max_iterations: Optional[int] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> GenerationResults:
    """Generate ``runs`` puzzles per (oracle, size) sequentially.

    Sizes outside the supported range and unknown oracles raise ``ValueError``
    before any work starts.
    """
    cap = max_iterations if max_iterations is not None else settings.MAX_COMPLETION_ITERATIONS
    params = _build_params(sizes, runs, oracles, seed, cap, validate)
    progress = ProgressPrinter(len(params), progress_label) if progress_label else None

    records: List[GenerationRecord] = []
    current: Optional[Tuple[str, int]] = None
    for index, item in enumerate(params, start=1):
        n, oracle = item[0], item[1]
        if current != (oracle, n):
            current = (oracle, n)
            print(f"=== N = {n}, oracle {oracle} ===")
        record = run_single_generation(item)
        records.append(record)
        if progress:
            progress.update(index, f"N={n} {oracle} run {item[2]} hints={record['hints']}")

    return _collect(records)


def run_generation_experiments_parallel(
    sizes: List[int],
    runs: int,
    oracles: List[str],
    seed: Optional[int] = None,
    max_iterations: Optional[int] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    workers: Optional[int] = None,
) -> GenerationResults:
    """Same as ``run_generation_experiments`` but spread over worker processes.

    Every task carries its own seed, so for a fixed ``seed`` the hint counts
    match the sequential runner exactly; only timings differ.
    """
    cap = max_iterations if max_iterations is not None else settings.MAX_COMPLETION_ITERATIONS
    params = _build_params(sizes, runs, oracles, seed, cap, validate)
    progress = ProgressPrinter(len(params), progress_label) if progress_label else None
    num_workers = workers or settings.NUM_PROCESSES

    print(f"Generating {len(params)} puzzles on {num_workers} worker(s)...")
    records: List[GenerationRecord] = []
    with ProcessPoolExecutor(max_workers=num_workers) as executor:
        for index, record in enumerate(executor.map(run_single_generation, params), start=1):
            records.append(record)
            if progress:
                progress.update(index, f"N={record['n']} {record['oracle']} run {record['run']}")

    return _collect(records)
