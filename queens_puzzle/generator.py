"""Puzzle generation: a random full solution reduced to a minimal set of hints.

``generate_puzzle`` starts from every queen of a random solution and visits
the queens once each, in shuffled order. A queen is dropped when the hints
that remain still pass the chosen solvability oracle; otherwise it stays. The
decision for each queen is made against the hints left at that moment, so the
visiting order decides which queens survive. The result is locally minimal:
removing any single surviving hint makes the oracle reject the puzzle. It is
not necessarily the smallest possible hint set.

Oracles
-------
- ``"deduction"``: the hints must be completable by naked singles alone
  (``deduction.is_logically_solvable``). This is the default.
- ``"uniqueness"``: the hints must admit exactly one completion
  (``uniqueness.count_completions(..., limit=2) == 1``).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .backtracking import solve
from .deduction import is_logically_solvable
from .uniqueness import MAX_ITERATIONS, has_unique_completion
from .utils import Coordinate, shuffled

Oracle = Callable[[int, Sequence[Coordinate]], bool]

ORACLE_NAMES: Tuple[str, ...] = ("deduction", "uniqueness")


@dataclass(frozen=True)
class Puzzle:
    """A generated puzzle: the full solution and the hints revealed to the player.

    ``hint_indices`` index into ``solution``; ``hints`` lists those queens in
    the same (ascending index) order. All three are tuples; ``as_dict`` returns
    fresh lists.
    """

    n: int
    solution: Tuple[Coordinate, ...]
    hints: Tuple[Coordinate, ...]
    hint_indices: Tuple[int, ...]
    oracle: str

    def as_dict(self) -> Dict[str, List[Coordinate]]:
        return {"solution": list(self.solution), "hints": list(self.hints)}


def get_oracle(name: str, max_iterations: int = MAX_ITERATIONS) -> Oracle:
    """Return a solvability predicate ``(n, hints) -> bool`` by label.

    Parameters
    ----------
    name : str
        One of ``"deduction"`` or ``"uniqueness"`` (case-insensitive).
    max_iterations : int
        Node-expansion budget forwarded to the uniqueness oracle.
    """

    def _unique(n: int, hints: Sequence[Coordinate]) -> bool:
        return has_unique_completion(n, hints, max_iterations)

    mapping: Dict[str, Oracle] = {
        "deduction": is_logically_solvable,
        "uniqueness": _unique,
    }
    try:
        return mapping[name.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown oracle: {name}. Allowed: {', '.join(ORACLE_NAMES)}") from exc


def minimize_hints(
    n: int,
    solution: Sequence[Coordinate],
    oracle: Oracle,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Greedily drop queens from ``solution`` while ``oracle`` still accepts.

    Returns the surviving indices into ``solution`` in ascending order.
    """
    kept = list(range(len(solution)))
    for index in shuffled(range(len(solution)), rng):
        if index not in kept:
            continue
        candidate = [i for i in kept if i != index]
        if oracle(n, [solution[i] for i in candidate]):
            kept = candidate
    return kept


def generate_puzzle(
    n: int,
    oracle: str = "deduction",
    rng: Optional[random.Random] = None,
    solution: Optional[Sequence[Coordinate]] = None,
    max_iterations: int = MAX_ITERATIONS,
) -> Puzzle:
    """Create a new puzzle of size ``n``.

    Parameters
    ----------
    n : int
        Board size; callers keep it within 4..15.
    oracle : str
        Solvability oracle used to accept each hint removal.
    rng : random.Random | None
        Random source for both the solver and the visiting order.
    solution : Sequence[Coordinate] | None
        Reuse an existing full solution instead of solving a new one.
    max_iterations : int
        Node-expansion budget of the uniqueness oracle.
    """
    accepts = get_oracle(oracle, max_iterations)
    full = tuple(solution) if solution is not None else tuple(solve(n, rng))
    kept = minimize_hints(n, full, accepts, rng)
    return Puzzle(
        n=n,
        solution=full,
        hints=tuple(full[i] for i in kept),
        hint_indices=tuple(kept),
        oracle=oracle.lower(),
    )


def is_locally_minimal(n: int, hints: Sequence[Coordinate], oracle: Oracle) -> bool:
    """Return True if no single hint can be removed while ``oracle`` still accepts."""
    hints = list(hints)
    for i in range(len(hints)):
        if oracle(n, hints[:i] + hints[i + 1:]):
            return False
    return True
