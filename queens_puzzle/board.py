"""Playable grid seeded from a puzzle's hints.

The front end owns gameplay; this module only provides the pure pieces it
builds on: the initial grid (given queens placed, everything else empty),
queen extraction, conflict detection and a plain-text rendering used by the
command line.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Sequence, Set

from .utils import Coordinate, attacks


class CellState(IntEnum):
    EMPTY = 0
    QUEEN = 1
    MARKED = 2
    GIVEN = 3


Grid = List[List[CellState]]

_SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.QUEEN: "q",
    CellState.MARKED: "x",
    CellState.GIVEN: "Q",
}


def seed_board(n: int, hints: Sequence[Coordinate]) -> Grid:
    """Return an ``n`` x ``n`` grid with every hint as a GIVEN cell."""
    grid = [[CellState.EMPTY] * n for _ in range(n)]
    for row, col in hints:
        grid[row][col] = CellState.GIVEN
    return grid


def queens_on_board(grid: Grid) -> List[Coordinate]:
    """Return all queen cells (given or player-placed) in row-major order."""
    return [
        (r, c)
        for r, row in enumerate(grid)
        for c, cell in enumerate(row)
        if cell in (CellState.QUEEN, CellState.GIVEN)
    ]


def conflict_cells(grid: Grid) -> Set[Coordinate]:
    """Return the cells of every queen that attacks at least one other queen."""
    queens = queens_on_board(grid)
    result: Set[Coordinate] = set()
    for i in range(len(queens)):
        for j in range(i + 1, len(queens)):
            if attacks(queens[i], queens[j]):
                result.add(queens[i])
                result.add(queens[j])
    return result


def render_board(grid: Grid) -> str:
    """Render the grid as text, one line per row (Q given, q placed, x marked)."""
    return "\n".join(" ".join(_SYMBOLS[cell] for cell in row) for row in grid)
