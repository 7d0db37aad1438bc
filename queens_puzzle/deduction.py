"""Logical-deduction oracle: can the hints be completed without guessing?

The oracle mimics a player who only ever makes forced moves. Starting from
the hint queens it repeatedly looks for *naked singles*, i.e. a row or column
with exactly one cell left where a queen could still go, and places a queen
there. No branching is ever performed.

State
-----
- ``possible[r][c]``: True while a queen could still stand on ``(r, c)``.
- ``row_done[r]`` / ``col_done[c]``: the row or column already holds a queen.
- the list of queens placed so far (hints first, then forced moves).

Placing a queen clears its whole row and column and the four diagonal rays
running from it to the board edges, which is exactly the attack relation.

Outcome
-------
- A row or column without a queen and with zero possible cells is a
  contradiction: the result is negative immediately.
- When a full pass over rows and columns places nothing, the hints are
  logically solvable iff all ``n`` queens are on the board.

Each call allocates fresh state, so repeated calls on the same input always
agree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .utils import Coordinate


@dataclass
class DeductionResult:
    """Outcome of a deduction run.

    Attributes
    ----------
    solvable : bool
        True when forced moves alone completed the board.
    queens : List[Coordinate]
        Hints followed by forced queens, in the order they were placed.
    forced : List[Coordinate]
        Only the queens placed by deduction.
    passes : int
        Number of full row/column sweeps performed.
    contradiction : str | None
        Human-readable reason when the hints proved inconsistent.
    """

    solvable: bool
    queens: List[Coordinate] = field(default_factory=list)
    forced: List[Coordinate] = field(default_factory=list)
    passes: int = 0
    contradiction: Optional[str] = None


class _Grid:
    """Candidate matrix with row/column bookkeeping for one deduction run."""

    def __init__(self, n: int):
        self.n = n
        self.possible = [[True] * n for _ in range(n)]
        self.row_done = [False] * n
        self.col_done = [False] * n
        self.queens: List[Coordinate] = []

    def place(self, row: int, col: int) -> None:
        n = self.n
        possible = self.possible
        for i in range(n):
            possible[row][i] = False
            possible[i][col] = False
        for dr, dc in ((1, 1), (1, -1), (-1, 1), (-1, -1)):
            r, c = row + dr, col + dc
            while 0 <= r < n and 0 <= c < n:
                possible[r][c] = False
                r += dr
                c += dc
        self.row_done[row] = True
        self.col_done[col] = True
        self.queens.append((row, col))

    def row_candidates(self, row: int) -> List[int]:
        return [c for c in range(self.n) if self.possible[row][c]]

    def col_candidates(self, col: int) -> List[int]:
        return [r for r in range(self.n) if self.possible[r][col]]


def deduce(n: int, hints: Sequence[Coordinate]) -> DeductionResult:
    """Propagate naked singles from ``hints`` and report the outcome.

    Parameters
    ----------
    n : int
        Board size.
    hints : Sequence[Coordinate]
        Pre-placed queens. Hints off the board or attacking an earlier hint
        are reported as a contradiction.

    Returns
    -------
    DeductionResult
        See the class docstring. ``queens`` is the full solution when
        ``solvable`` is True.
    """
    grid = _Grid(n)
    for row, col in hints:
        if not (0 <= row < n and 0 <= col < n) or not grid.possible[row][col]:
            return DeductionResult(
                False, list(grid.queens), [], 0, f"hint ({row}, {col}) conflicts with earlier hints"
            )
        grid.place(row, col)

    forced: List[Coordinate] = []
    passes = 0
    progress = True
    while progress:
        progress = False
        passes += 1

        for row in range(n):
            if grid.row_done[row]:
                continue
            candidates = grid.row_candidates(row)
            if not candidates:
                return DeductionResult(False, list(grid.queens), forced, passes, f"row {row} has no candidate")
            if len(candidates) == 1:
                grid.place(row, candidates[0])
                forced.append((row, candidates[0]))
                progress = True

        for col in range(n):
            if grid.col_done[col]:
                continue
            candidates = grid.col_candidates(col)
            if not candidates:
                return DeductionResult(False, list(grid.queens), forced, passes, f"column {col} has no candidate")
            if len(candidates) == 1:
                grid.place(candidates[0], col)
                forced.append((candidates[0], col))
                progress = True

    return DeductionResult(len(grid.queens) == n, list(grid.queens), forced, passes)


def is_logically_solvable(n: int, hints: Sequence[Coordinate]) -> bool:
    """Return True if forced moves alone extend ``hints`` to a full placement."""
    return deduce(n, hints).solvable
