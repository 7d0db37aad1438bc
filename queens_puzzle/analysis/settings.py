"""Global settings for the puzzle-generation analysis pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`queens_puzzle.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

from queens_puzzle.uniqueness import MAX_ITERATIONS

# Supported board sizes (inclusive); the core assumes callers stay inside.
MIN_BOARD_SIZE: int = 4
MAX_BOARD_SIZE: int = 15

# Board sizes to evaluate (in ascending order)
SIZES: List[int] = [4, 6, 8, 10, 12]

# Number of puzzles generated per (oracle, size) pair
RUNS_PER_SIZE: int = 20

# Oracles to compare; see queens_puzzle.generator.ORACLE_NAMES
ORACLES: List[str] = ["deduction", "uniqueness"]

# Completion cap handed to the uniqueness oracle (0, 1 or "two or more")
COMPLETION_LIMIT: int = 2

# Node-expansion budget of the uniqueness oracle; hitting it means "not unique"
MAX_COMPLETION_ITERATIONS: int = MAX_ITERATIONS

# Base seed for per-run random sources (None = nondeterministic)
SEED: Optional[int] = 42

# Output directory for CSV and charts
OUT_DIR: str = "results_queens_puzzle"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots include a datestamp suffix (e.g., _20251113-142530)
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to output filenames
RUN_TAG: Optional[str] = None


def set_iteration_cap(max_iterations: Optional[int]) -> None:
    """Configure the uniqueness oracle's node-expansion budget.

    ``None`` restores the library default. The active value is printed so the
    approximation policy is explicit at run start.
    """
    global MAX_COMPLETION_ITERATIONS
    if max_iterations is None:
        MAX_COMPLETION_ITERATIONS = MAX_ITERATIONS
    else:
        if max_iterations <= 0:
            raise ValueError(f"max_completion_iterations must be positive, got {max_iterations}")
        MAX_COMPLETION_ITERATIONS = int(max_iterations)
    print(f"Uniqueness oracle iteration cap: {MAX_COMPLETION_ITERATIONS} (cap reached => not unique)")


def validate_board_size(n: int) -> int:
    """Return ``n`` if it lies in the supported range, else raise ``ValueError``."""
    if not MIN_BOARD_SIZE <= n <= MAX_BOARD_SIZE:
        raise ValueError(f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {n}")
    return n
