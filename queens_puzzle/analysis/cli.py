"""Command-line interface and high-level pipelines for puzzle generation.

This module wires together configuration loading, single-puzzle generation
and batch experiments (sequential or parallel). It isolates I/O, argument
parsing and progress reporting from the core algorithmic modules so that the
rest of the codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import random
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from . import settings
from .experiments import run_generation_experiments, run_generation_experiments_parallel
from .reporting import save_raw_runs_to_csv, save_summary_to_csv
from .stats import GenerationResults
from config_manager import ConfigManager
from queens_puzzle.board import render_board, seed_board
from queens_puzzle.deduction import deduce
from queens_puzzle.generator import ORACLE_NAMES, generate_puzzle, get_oracle, is_locally_minimal
from queens_puzzle.uniqueness import count_completions
from queens_puzzle.utils import is_full_solution


# ------------- Utils --------------------------------------------------------

def parse_oracle_filters(oracle_args: Optional[List[str]]) -> Optional[List[str]]:
    """Normalize oracle filter CLI inputs into a flat list of labels.

    Accepts repeated flags (e.g., ``-o deduction -o uniqueness``) and
    comma-separated lists. Returns ``None`` when no filter is provided so that
    callers can fall back to the configured default set.
    """
    if not oracle_args:
        return None
    selected: List[str] = []
    for entry in oracle_args:
        for token in entry.split(","):
            token = token.strip().lower()
            if token:
                if token not in ORACLE_NAMES:
                    raise ValueError(f"Unknown oracle '{token}'. Allowed: {', '.join(ORACLE_NAMES)}")
                selected.append(token)
    unique = list(dict.fromkeys(selected))  # preserve order, remove dups
    return unique or None


def parse_sizes(size_args: Optional[List[str]]) -> Optional[List[int]]:
    """Parse ``--sizes 4,6,8`` / repeated flags / ``4-8`` ranges into validated ints."""
    if not size_args:
        return None
    sizes: List[int] = []
    for entry in size_args:
        for token in entry.split(","):
            token = token.strip()
            if not token:
                continue
            if "-" in token:
                low, high = (int(part) for part in token.split("-", 1))
                sizes.extend(range(low, high + 1))
            else:
                sizes.append(int(token))
    for n in sizes:
        settings.validate_board_size(n)
    return sorted(set(sizes)) or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and update the global ``settings`` module in place."""
    config_mgr = ConfigManager(config_path)

    generation = config_mgr.get_generation_settings()
    if generation:
        settings.SIZES = [settings.validate_board_size(int(n)) for n in generation.get("sizes", settings.SIZES)]
        settings.RUNS_PER_SIZE = int(generation.get("runs_per_size", settings.RUNS_PER_SIZE))
        settings.SEED = generation.get("seed", settings.SEED)
        settings.OUT_DIR = generation.get("output_dir", settings.OUT_DIR)
        settings.ORACLES = parse_oracle_filters(config_mgr.get_oracles()) or settings.ORACLES

    oracle_settings = config_mgr.get_oracle_settings()
    if oracle_settings:
        settings.set_iteration_cap(oracle_settings.get("max_completion_iterations"))

    return config_mgr


# ------------- Single puzzle -----------------------------------------------

def main_generate(n: int, oracle: str, seed: Optional[int], show_solution: bool = False) -> None:
    """Generate one puzzle and print its board, hints and deduction trace."""
    settings.validate_board_size(n)
    rng = random.Random(seed)
    start = perf_counter()
    puzzle = generate_puzzle(n, oracle=oracle, rng=rng, max_iterations=settings.MAX_COMPLETION_ITERATIONS)
    elapsed = perf_counter() - start

    print(f"=== N = {n}, oracle {puzzle.oracle} ===")
    print(render_board(seed_board(n, puzzle.hints)))
    print(f"Hints ({len(puzzle.hints)}): {puzzle.hints}")
    if show_solution:
        print(f"Solution: {puzzle.solution}")
    result = deduce(n, puzzle.hints)
    status = "solvable by deduction" if result.solvable else "needs search"
    print(f"Forced moves: {len(result.forced)} in {result.passes} pass(es) ({status})")
    print(f"Generated in {elapsed:.4f}s")


# ------------- Pipelines ---------------------------------------------------

def main_benchmark(
    oracles: List[str],
    sizes: List[int],
    runs: int,
    mode: str = "sequential",
    plots: bool = True,
    validate: bool = False,
) -> GenerationResults:
    """Run a generation batch, export CSVs and (optionally) charts."""
    print(f"Oracles: {oracles}")
    print(f"Sizes: {sizes}, runs per size: {runs}, seed: {settings.SEED}")
    start = perf_counter()

    runner = run_generation_experiments_parallel if mode == "parallel" else run_generation_experiments
    results = runner(
        sizes,
        runs,
        oracles,
        seed=settings.SEED,
        max_iterations=settings.MAX_COMPLETION_ITERATIONS,
        progress_label="Generation",
        validate=validate,
    )

    save_summary_to_csv(results, settings.OUT_DIR)
    save_raw_runs_to_csv(results, settings.OUT_DIR)
    if plots:
        from .plots import plot_comprehensive_analysis

        plot_comprehensive_analysis(results, settings.OUT_DIR)

    for oracle in sorted(results):
        for n, entry in sorted(results[oracle].items()):
            mean_hints = entry["hints"].get("mean") or 0.0
            print(f"  {oracle:<10} N={n:<3} hints mean={mean_hints:.2f} unique_rate={entry['unique_rate']:.2f}")

    total_time = perf_counter() - start
    print(f"Total time: {total_time:.1f}s ({total_time/60:.1f} minutes)")
    return results


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test at N=8.

    Verifies that:
    - both oracles accept their own minimized hints, and those hints are
      locally minimal subsets of a valid solution;
    - the empty hint set is rejected by both oracles;
    - the experiment pipeline produces non-empty CSVs in a temporary folder.
    """
    print("Running quick regression tests (N=8) across both oracles...")

    for oracle in ORACLE_NAMES:
        puzzle = generate_puzzle(8, oracle=oracle, rng=random.Random(42))
        accepts = get_oracle(oracle)
        if not is_full_solution(puzzle.solution, 8):
            raise AssertionError(f"{oracle}: invalid solution {puzzle.solution}")
        if not set(puzzle.hints) <= set(puzzle.solution):
            raise AssertionError(f"{oracle}: hints are not a subset of the solution")
        if not accepts(8, puzzle.hints) or not is_locally_minimal(8, puzzle.hints, accepts):
            raise AssertionError(f"{oracle}: hints {puzzle.hints} are not a locally minimal accepted set")
        if accepts(8, []):
            raise AssertionError(f"{oracle}: accepted an empty hint set")
        print(f"  [{oracle}] {len(puzzle.hints)} hints: {puzzle.hints}")

    if count_completions(8, [], 2) != 2:
        raise AssertionError("Empty 8x8 board should have at least two completions")

    results = run_generation_experiments([8], 3, list(ORACLE_NAMES), seed=42, validate=True)
    with tempfile.TemporaryDirectory() as tmpdir:
        paths = [save_summary_to_csv(results, tmpdir), save_raw_runs_to_csv(results, tmpdir)]
        for path in paths:
            csv_path = Path(path)
            if not csv_path.exists() or csv_path.stat().st_size == 0:
                raise AssertionError(f"CSV was not generated successfully: {csv_path}")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Generate N-Queens puzzles with minimal hint sets.")
    parser.add_argument("--config", default=None, help="Path to a JSON configuration file (default: built-in settings).")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests (N=8) and exit.")
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Generate a single puzzle and print it.")
    gen.add_argument("n", type=int, help=f"Board size ({settings.MIN_BOARD_SIZE}..{settings.MAX_BOARD_SIZE}).")
    gen.add_argument("--oracle", "-o", choices=list(ORACLE_NAMES), default="deduction", help="Solvability oracle (default: deduction).")
    gen.add_argument("--seed", type=int, default=None, help="Seed for reproducible puzzles.")
    gen.add_argument("--show-solution", action="store_true", help="Also print the full solution.")

    bench = sub.add_parser("benchmark", help="Generate batches of puzzles and export statistics.")
    bench.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="sequential",
        help="Execution mode: sequential (default) or process-parallel.",
    )
    bench.add_argument("--oracle", "-o", action="append", help="Filter oracles (comma-separated or multiple flags). Default: all configured.")
    bench.add_argument("--sizes", "-n", action="append", help="Board sizes, e.g. 4,6,8 or 4-10. Default: configured sizes.")
    bench.add_argument("--runs", "-r", type=int, default=None, help="Puzzles per size and oracle.")
    bench.add_argument("--no-plots", action="store_true", help="Skip chart generation.")
    bench.add_argument("--validate", action="store_true", help="Validate every generated puzzle (extra assertions).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        if args.config:
            apply_configuration(args.config)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    try:
        if args.command == "generate":
            main_generate(args.n, args.oracle, args.seed, args.show_solution)
        elif args.command == "benchmark":
            oracles = parse_oracle_filters(args.oracle) or settings.ORACLES
            sizes = parse_sizes(args.sizes) or settings.SIZES
            runs = args.runs if args.runs is not None else settings.RUNS_PER_SIZE
            main_benchmark(oracles, sizes, runs, mode=args.mode, plots=not args.no_plots, validate=args.validate)
        else:
            parser.print_help()
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc
