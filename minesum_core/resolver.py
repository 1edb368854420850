from __future__ import annotations

from dataclasses import dataclass

from .board import REVEALED, SELECTING, SUCCESS, Board
from .selection import Selection, selection_sum

WINNING_SUM = 10
MISTAKE_LIMIT = 3


@dataclass(frozen=True)
class Resolution:
    """Outcome of judging a completed pair."""
    matched: bool
    board: Board
    mistakes: int
    failed: bool


def is_match(selection: Selection) -> bool:
    return len(selection) == 2 and selection_sum(selection) == WINNING_SUM


def resolve_pair(board: Board, selection: Selection, mistakes: int) -> Resolution:
    """Judges a two-cell selection.

    A match marks both cells `success` and leaves the cascade to the caller. A mismatch
    puts both cells back to `revealed` and counts a mistake; reaching MISTAKE_LIMIT fails
    the game.
    """
    if len(selection) != 2:
        raise ValueError(f'Expected a two-cell selection, got {len(selection)}')
    coords = [entry.coord for entry in selection]
    if is_match(selection):
        marked = board.with_states(coords, SUCCESS, only_from=(SELECTING,))
        return Resolution(matched=True, board=marked, mistakes=mistakes, failed=False)
    reverted = board.with_states(coords, REVEALED, only_from=(SELECTING,))
    mistakes += 1
    return Resolution(matched=False, board=reverted, mistakes=mistakes, failed=mistakes >= MISTAKE_LIMIT)
