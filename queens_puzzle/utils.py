"""Utility helpers for the N-Queens puzzle generator.

This module provides the low-level primitives shared by the solver, the two
solvability oracles and the board helpers.

Representation
--------------
A queen is a ``(row, col)`` coordinate with 0-based indices. A placement is an
ordered sequence of coordinates; order carries no meaning for validity.
"""

from __future__ import annotations

import random
from collections import Counter
from typing import List, Optional, Sequence, Tuple, TypeVar

Coordinate = Tuple[int, int]

T = TypeVar("T")


def attacks(a: Coordinate, b: Coordinate) -> bool:
    """Return True if two queens share a row, a column or a diagonal."""
    dr = a[0] - b[0]
    dc = a[1] - b[1]
    return dr == 0 or dc == 0 or abs(dr) == abs(dc)


def conflicts(queens: Sequence[Coordinate]) -> int:
    """Compute the number of conflicting queen pairs in O(N).

    Counts occurrences per row, column and both diagonals; every line holding
    ``k > 1`` queens contributes ``k*(k-1)/2`` pairs. Two queens on the same
    cell share all four lines but still form a single attacking pair, so the
    three surplus line counts are subtracted per such pair.
    """
    cells: Counter[Coordinate] = Counter()
    row_count: Counter[int] = Counter()
    col_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for row, col in queens:
        cells[(row, col)] += 1
        row_count[row] += 1
        col_count[col] += 1
        diag1[row - col] += 1
        diag2[row + col] += 1

    def _pairs(counter: Counter) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    lines = _pairs(row_count) + _pairs(col_count) + _pairs(diag1) + _pairs(diag2)
    return lines - 3 * _pairs(cells)


def is_valid_placement(queens: Sequence[Coordinate], n: int) -> bool:
    """Return True if ``queens`` is a partial placement on an ``n`` x ``n`` board.

    Contract
    - every coordinate lies inside the board
    - at most ``n`` queens
    - no pair attacks each other
    """
    if len(queens) > n:
        return False
    for row, col in queens:
        if not (0 <= row < n and 0 <= col < n):
            return False
    return conflicts(queens) == 0


def is_full_solution(queens: Sequence[Coordinate], n: int) -> bool:
    """Return True if ``queens`` is a complete N-Queens solution for ``n``."""
    return n > 0 and len(queens) == n and is_valid_placement(queens, n)


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a new list holding ``items`` in uniformly random order.

    Fisher-Yates over a copy; the input is left untouched. When ``rng`` is
    None the module-level ``random`` state is used, so seeding ``random``
    before invocation makes the result reproducible.
    """
    rand = rng if rng is not None else random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rand.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result
