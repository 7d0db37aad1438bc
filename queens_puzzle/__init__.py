"""N-Queens puzzle generation: solver, solvability oracles and hint minimizer."""

from .backtracking import solve, solve_with_stats
from .board import CellState, conflict_cells, render_board, seed_board
from .deduction import DeductionResult, deduce, is_logically_solvable
from .generator import Puzzle, generate_puzzle, get_oracle, is_locally_minimal
from .uniqueness import MAX_ITERATIONS, count_completions
from .utils import attacks, conflicts, is_full_solution, is_valid_placement

__all__ = [
    "solve",
    "solve_with_stats",
    "count_completions",
    "MAX_ITERATIONS",
    "deduce",
    "is_logically_solvable",
    "DeductionResult",
    "generate_puzzle",
    "get_oracle",
    "is_locally_minimal",
    "Puzzle",
    "CellState",
    "seed_board",
    "conflict_cells",
    "render_board",
    "attacks",
    "conflicts",
    "is_valid_placement",
    "is_full_solution",
]
