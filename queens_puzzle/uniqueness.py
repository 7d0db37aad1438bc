"""Completion counting: the uniqueness oracle for hint minimization.

``count_completions`` enumerates the full placements that extend a partial
placement of fixed queens, stopping as soon as ``limit`` completions have been
seen. The generator calls it with ``limit=2`` so that the answer only has to
distinguish "none", "exactly one" and "more than one".

Search is the same iterative backtracking as ``backtracking.solve_with_stats``
with three differences: columns are tried in ascending order (exhaustive, not
sampled), rows already holding a fixed queen are never branched on, and the
occupancy masks are seeded from the fixed queens before the search starts.

Iteration cap
-------------
Every row the search descends into counts as one node expansion. Once
``max_iterations`` expansions have been spent the function stops and reports
``limit``. The minimizer reads that as "not unique" and keeps the hint it was
trying to drop, so hitting the cap can only make a puzzle less minimal, never
ambiguous or unsolvable.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .backtracking import Occupancy, _Frame
from .utils import Coordinate

MAX_ITERATIONS = 200_000


def count_completions(
    n: int,
    fixed_queens: Sequence[Coordinate],
    limit: int = 2,
    max_iterations: int = MAX_ITERATIONS,
) -> int:
    """Count full completions of ``fixed_queens``, capped at ``limit``.

    Parameters
    ----------
    n : int
        Board size.
    fixed_queens : Sequence[Coordinate]
        Queens that every completion must contain.
    limit : int
        Stop counting once this many completions were found.
    max_iterations : int
        Node-expansion budget; when exhausted the result is ``limit``.

    Returns
    -------
    int
        A value in ``[0, limit]``. Fixed queens that attack each other, share a
        row, or fall outside the board have no completion and yield 0.
    """
    occupancy = Occupancy(n)
    fixed_cols: List[Optional[int]] = [None] * n
    for row, col in fixed_queens:
        if not (0 <= row < n and 0 <= col < n):
            return 0
        if fixed_cols[row] is not None or not occupancy.is_free(row, col):
            return 0
        fixed_cols[row] = col
        occupancy.place(row, col)

    free_rows = [row for row in range(n) if fixed_cols[row] is None]
    if not free_rows:
        # The fixed queens already form the only completion.
        return min(1, limit)

    count = 0
    expansions = 1
    stack: List[_Frame] = [_Frame(free_rows[0], list(range(n)))]

    while stack:
        frame = stack[-1]
        if frame.placed is not None:
            occupancy.remove(frame.row, frame.placed)
            frame.placed = None

        # Advance to the next safe column for this row.
        col = None
        while frame.next_index < len(frame.candidates):
            candidate = frame.candidates[frame.next_index]
            frame.next_index += 1
            if occupancy.is_free(frame.row, candidate):
                col = candidate
                break
        if col is None:
            stack.pop()
            continue

        occupancy.place(frame.row, col)
        frame.placed = col

        depth = len(stack)
        if depth == len(free_rows):
            count += 1
            if count >= limit:
                return count
            continue

        if expansions >= max_iterations:
            return limit
        expansions += 1
        stack.append(_Frame(free_rows[depth], list(range(n))))

    return count


def has_unique_completion(
    n: int, fixed_queens: Sequence[Coordinate], max_iterations: int = MAX_ITERATIONS
) -> bool:
    """Return True if exactly one full placement extends ``fixed_queens``."""
    return count_completions(n, fixed_queens, 2, max_iterations) == 1
