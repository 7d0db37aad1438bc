"""Tests for grid seeding, conflict detection and rendering."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queens_puzzle.board import CellState, conflict_cells, queens_on_board, render_board, seed_board


class BoardTests(unittest.TestCase):
    def test_seed_board_marks_hints_as_given(self):
        grid = seed_board(4, [(0, 1), (2, 0)])
        self.assertEqual(len(grid), 4)
        self.assertEqual(grid[0][1], CellState.GIVEN)
        self.assertEqual(grid[2][0], CellState.GIVEN)
        self.assertEqual(sum(cell == CellState.EMPTY for row in grid for cell in row), 14)

    def test_rows_are_independent(self):
        grid = seed_board(3, [])
        grid[0][0] = CellState.QUEEN
        self.assertEqual(grid[1][0], CellState.EMPTY)

    def test_queens_include_given_and_placed(self):
        grid = seed_board(4, [(0, 1)])
        grid[1][3] = CellState.QUEEN
        grid[2][2] = CellState.MARKED
        self.assertEqual(queens_on_board(grid), [(0, 1), (1, 3)])

    def test_conflict_cells(self):
        grid = seed_board(4, [(0, 1)])
        self.assertEqual(conflict_cells(grid), set())
        grid[1][2] = CellState.QUEEN
        grid[3][3] = CellState.QUEEN
        self.assertEqual(conflict_cells(grid), {(0, 1), (1, 2)})

    def test_render(self):
        grid = seed_board(3, [(0, 0)])
        grid[1][2] = CellState.QUEEN
        grid[2][1] = CellState.MARKED
        self.assertEqual(render_board(grid), "Q . .\n. . q\n. x .")


if __name__ == "__main__":
    unittest.main()
