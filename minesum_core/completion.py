from __future__ import annotations

from collections import Counter
from itertools import combinations

from .board import REVEALED, Board
from .resolver import WINNING_SUM


def has_playable_pairs(board: Board) -> bool:
    """True if two distinct revealed cells sum to WINNING_SUM.

    One pass: each revealed value either completes a value some earlier cell is waiting
    for, or registers its own complement as needed.
    """
    needed: Counter = Counter()
    for cell in board.cells_in(REVEALED):
        if needed[cell.value]:
            return True
        needed[WINNING_SUM - cell.value] += 1
    return False


def has_playable_pairs_bruteforce(board: Board) -> bool:
    """Quadratic reference used to cross-check has_playable_pairs."""
    revealed = list(board.cells_in(REVEALED))
    return any(a.value + b.value == WINNING_SUM for a, b in combinations(revealed, 2))
