"""Randomized backtracking solver for the N-Queens problem.

This module implements an iterative (non-recursive) backtracking search that
produces one full placement of N non-attacking queens. Two entry points are
provided:

- solve_with_stats(n, rng=None, time_limit=None): the instrumented search,
    returning ``(solution, nodes_explored, elapsed_seconds)``.
- solve(n, rng=None): the plain contract used by the puzzle generator, returning
    only the solution.

Implementation overview
-----------------------
- State representation: queens are appended row by row as ``(row, col)``
    coordinates; row ``r`` always receives the ``r``-th queen.
- Constraint tracking: an ``Occupancy`` object owns three boolean arrays,
    ``col_used[c]``, ``diag1_used[r-c+offset]`` and ``diag2_used[r+c]`` with
    ``offset = n - 1``, giving O(1) safety checks. One instance is shared by the
    whole search; every ``place`` is paired with a ``remove`` on backtrack, so
    the arrays after exploring a subtree equal the arrays before it.
- Search strategy: depth-first over rows 0..N-1 using an explicit stack of
    decision frames. Each frame receives a freshly shuffled column order, which
    is what makes repeated calls return different solutions.
- Early exit: the search returns as soon as the last row holds a queen; sibling
    branches are never explored after a success.

Determinism
-----------
The column order is random. Pass a seeded ``random.Random`` as ``rng`` (or seed
the module-level ``random``) for reproducible output.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from time import perf_counter
from typing import List, Optional, Tuple

from .utils import Coordinate, shuffled


class Occupancy:
    """Column and diagonal occupancy masks for an ``n`` x ``n`` board."""

    def __init__(self, n: int):
        self.n = n
        self.offset = n - 1
        self.col_used = [False] * n
        self.diag1_used = [False] * (2 * n - 1)
        self.diag2_used = [False] * (2 * n - 1)

    def is_free(self, row: int, col: int) -> bool:
        """Return True if no placed queen covers ``col`` or either diagonal."""
        return not (
            self.col_used[col]
            or self.diag1_used[row - col + self.offset]
            or self.diag2_used[row + col]
        )

    def place(self, row: int, col: int) -> None:
        self.col_used[col] = True
        self.diag1_used[row - col + self.offset] = True
        self.diag2_used[row + col] = True

    def remove(self, row: int, col: int) -> None:
        self.col_used[col] = False
        self.diag1_used[row - col + self.offset] = False
        self.diag2_used[row + col] = False


@dataclass
class _Frame:
    """Mutable stack frame capturing the state at a decision level."""

    row: int
    candidates: List[int]
    next_index: int = 0
    placed: Optional[int] = None


def solve_with_stats(
    n: int,
    rng: Optional[random.Random] = None,
    time_limit: Optional[float] = None,
) -> Tuple[Optional[List[Coordinate]], int, float]:
    """Find one random full placement via iterative backtracking.

    Parameters
    ----------
    n : int
        Board dimension N (N >= 1).
    rng : random.Random | None
        Source for the per-row column shuffles. Defaults to the module-level
        ``random`` state.
    time_limit : float | None
        Optional wall-clock time limit in seconds.

    Returns
    -------
    (solution, nodes_explored, elapsed_seconds)
        - solution: list of N ``(row, col)`` coordinates in row order, or None
          when no placement exists (N in {2, 3}) or the time limit expired.
        - nodes_explored: int, number of candidate columns considered.
        - elapsed_seconds: float, total wall time.

    Complexity
    ----------
    Exponential in the worst case; for the supported sizes (4..15) the pruning
    on columns and diagonals finds a solution in a few hundred nodes.
    """
    start = perf_counter()
    if n <= 0:
        return None, 0, perf_counter() - start

    occupancy = Occupancy(n)
    queens: List[Coordinate] = []
    stack: List[_Frame] = [_Frame(0, shuffled(range(n), rng))]
    explored = 0

    while stack:
        if time_limit is not None and (perf_counter() - start) > time_limit:
            return None, explored, perf_counter() - start

        frame = stack[-1]
        if frame.placed is not None:
            # Undo the previous choice at this level before trying the next column.
            occupancy.remove(frame.row, frame.placed)
            queens.pop()
            frame.placed = None

        if frame.next_index >= len(frame.candidates):
            # All columns failed for this row; backtrack to the previous row.
            stack.pop()
            continue

        col = frame.candidates[frame.next_index]
        frame.next_index += 1
        explored += 1
        if not occupancy.is_free(frame.row, col):
            continue

        occupancy.place(frame.row, col)
        queens.append((frame.row, col))
        frame.placed = col

        if frame.row == n - 1:
            return list(queens), explored, perf_counter() - start

        # Descend one row with a freshly shuffled column order.
        stack.append(_Frame(frame.row + 1, shuffled(range(n), rng)))

    return None, explored, perf_counter() - start


def solve(n: int, rng: Optional[random.Random] = None) -> List[Coordinate]:
    """Return one random full N-Queens solution as ``(row, col)`` pairs.

    Callers are expected to pass sizes in the supported range (4..15). If the
    exhaustive search proves that no placement exists, ``ValueError`` is raised.
    """
    solution, _, _ = solve_with_stats(n, rng)
    if solution is None:
        raise ValueError(f"No N-Queens placement exists for n={n}")
    return solution
