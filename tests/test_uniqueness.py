"""Tests for completion counting (uniqueness oracle)."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queens_puzzle.uniqueness import MAX_ITERATIONS, count_completions, has_unique_completion

FOUR_SOLUTION = [(0, 1), (1, 3), (2, 0), (3, 2)]


class CountCompletionsTests(unittest.TestCase):
    def test_known_totals_on_empty_boards(self):
        self.assertEqual(count_completions(4, [], 100), 2)
        self.assertEqual(count_completions(5, [], 100), 10)
        self.assertEqual(count_completions(6, [], 100), 4)
        self.assertEqual(count_completions(8, [], 100), 92)

    def test_empty_eight_board_stops_at_limit(self):
        self.assertEqual(count_completions(8, [], 2), 2)
        self.assertFalse(has_unique_completion(8, []))

    def test_fixed_rows_are_respected(self):
        self.assertEqual(count_completions(8, [(0, 0)], 100), 4)
        self.assertEqual(count_completions(4, [(0, 1)], 100), 1)
        self.assertEqual(count_completions(4, [(0, 0)], 100), 0)

    def test_single_hint_makes_four_queens_unique(self):
        self.assertTrue(has_unique_completion(4, [(0, 1)]))
        self.assertTrue(has_unique_completion(4, [(3, 2)]))

    def test_full_solution_is_its_only_completion(self):
        self.assertEqual(count_completions(4, FOUR_SOLUTION, 2), 1)

    def test_conflicting_fixed_queens_have_no_completion(self):
        self.assertEqual(count_completions(4, [(0, 0), (1, 1)], 2), 0)
        self.assertEqual(count_completions(4, [(0, 0), (0, 2)], 2), 0)
        self.assertEqual(count_completions(4, [(0, 4)], 2), 0)

    def test_iteration_cap_reports_limit(self):
        self.assertEqual(count_completions(8, [], 100, max_iterations=10), 100)
        self.assertEqual(MAX_ITERATIONS, 200_000)

    def test_order_of_fixed_queens_is_irrelevant(self):
        fixed = [(2, 0), (0, 1)]
        self.assertEqual(count_completions(4, fixed, 5), count_completions(4, list(reversed(fixed)), 5))

    def test_repeated_calls_agree(self):
        self.assertEqual(count_completions(7, [(0, 3)], 50), count_completions(7, [(0, 3)], 50))


if __name__ == "__main__":
    unittest.main()
