from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .board import REVEALED, SELECTING, Board, Cell, Coord

SUM_PLACEHOLDER = '--'


@dataclass(frozen=True)
class SelectionEntry:
    """A selected cell, captured at pick time so later board mutations don't change it."""
    row: int
    col: int
    value: int

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


Selection = Tuple[SelectionEntry, ...]  # 0 = idle, 1 = pick in progress, 2 = pair

EMPTY_SELECTION: Selection = tuple()


def entry_for(cell: Cell) -> SelectionEntry:
    if cell.value is None:
        raise ValueError(f'Cell {cell.id} has no value and cannot be selected')
    return SelectionEntry(cell.row, cell.col, cell.value)


def revert_selecting(board: Board) -> Board:
    """Moves every cell left in `selecting` back to `revealed`."""
    stale = [cell.coord for cell in board.cells_in(SELECTING)]
    return board.with_states(stale, REVEALED, only_from=(SELECTING,))


def selection_sum(selection: Selection) -> int:
    return sum(entry.value for entry in selection)


def sum_expression(selection: Selection) -> str:
    """'v1 + v2 = sum' for a completed pair, the placeholder otherwise."""
    if len(selection) < 2:
        return SUM_PLACEHOLDER
    terms = ' + '.join(str(entry.value) for entry in selection)
    return f'{terms} = {selection_sum(selection)}'


def begin_selection(board: Board, coord: Coord) -> Optional[Tuple[Board, SelectionEntry]]:
    """Starts a pick on a revealed cell.

    Returns the updated board and the start entry, or None when the cell can't start a pick.
    """
    cell = board.get(coord)
    if cell is None or cell.state != REVEALED:
        return None
    board = revert_selecting(board)
    entry = entry_for(cell)
    return board.with_states([entry.coord], SELECTING, only_from=(REVEALED,)), entry


def end_selection(board: Board, start: SelectionEntry, end: Optional[Coord]) -> Tuple[Board, Selection]:
    """Finishes a pick at `end` (the cell under the pointer at release, or None).

    A missing end, the start cell itself, or a cell that isn't revealed cancels the pick:
    the board comes back with no `selecting` cells and the selection is empty.
    Otherwise both cells are `selecting` and the pair is returned for resolution.
    """
    cell = board.get(end)
    if cell is None or cell.coord == start.coord or cell.state != REVEALED:
        return revert_selecting(board), EMPTY_SELECTION
    entry = entry_for(cell)
    board = board.with_states([entry.coord], SELECTING, only_from=(REVEALED,))
    return board, (start, entry)
