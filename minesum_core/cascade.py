from __future__ import annotations

from typing import List, Optional, Set

from .board import CLEARED, COVERED, REVEALED, Board, Coord
from .selection import Selection

CROSS_MIN_PATH = 3
SQUARE_MIN_PATH = 5

CROSS_OFFSETS = ((0, 0), (1, 0), (-1, 0), (0, 1), (0, -1))


def cross_cells(board: Board, pivot: Coord) -> List[Coord]:
    """The pivot and its four orthogonal neighbors, clipped to the board."""
    r, c = pivot
    return [(r + dr, c + dc) for dr, dc in CROSS_OFFSETS if board.in_bounds(r + dr, c + dc)]


def square_cells(board: Board, pivot: Coord) -> List[Coord]:
    """The 3x3 neighborhood of the pivot, clipped to the board."""
    r, c = pivot
    return [
        (r + dr, c + dc)
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
        if board.in_bounds(r + dr, c + dc)
    ]


def bonus_cells(board: Board, path_length: int, pivot: Optional[Coord]) -> List[Coord]:
    """Extra cells hit by a resolved path, by length: square from 5, cross from 3, else none."""
    if pivot is None:
        return []
    if path_length >= SQUARE_MIN_PATH:
        return square_cells(board, pivot)
    if path_length >= CROSS_MIN_PATH:
        return cross_cells(board, pivot)
    return []


def reveal_targets(board: Board, path_length: int, pivot: Optional[Coord]) -> List[Coord]:
    """Cells uncovered around the pivot: square from 5, otherwise the cross."""
    if pivot is None:
        return []
    if path_length >= SQUARE_MIN_PATH:
        return square_cells(board, pivot)
    return cross_cells(board, pivot)


def clear_targets(board: Board, selection: Selection, path_length: int) -> List[Coord]:
    pivot = selection[-1].coord if selection else None
    seen: Set[Coord] = set()
    out: List[Coord] = []
    for coord in [entry.coord for entry in selection] + bonus_cells(board, path_length, pivot):
        if coord not in seen:
            seen.add(coord)
            out.append(coord)
    return out


def apply_cascade(board: Board, selection: Selection, path_length: Optional[int] = None) -> Board:
    """Clears the resolved selection (plus bonus) and reveals covered cells around the pivot.

    `path_length` defaults to the selection's length; the last entry is the pivot.
    The result is a single new board, so no half-applied cascade is ever visible.
    """
    if not selection:
        return board
    if path_length is None:
        path_length = len(selection)
    pivot = selection[-1].coord
    cleared = board.with_states(clear_targets(board, selection, path_length), CLEARED)
    return cleared.with_states(reveal_targets(board, path_length, pivot), REVEALED, only_from=(COVERED,))
