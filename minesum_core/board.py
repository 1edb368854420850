from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Tuple

Coord = Tuple[int, int]
CellState = str  # one of CELL_STATES

COVERED = 'covered'
REVEALED = 'revealed'
SELECTING = 'selecting'
SUCCESS = 'success'
CLEARED = 'cleared'
VOID = 'void'

CELL_STATES = (COVERED, REVEALED, SELECTING, SUCCESS, CLEARED, VOID)
TERMINAL_STATES = (CLEARED, VOID)
# States whose value is not shown to the player.
HIDDEN_STATES = (COVERED, CLEARED, VOID)

BOARD_SIZE = 9


def cell_key(r: int, c: int) -> str:
    """Stable string id for a cell, e.g. '4-7'."""
    return f"{r}-{c}"


def parse_cell_key(key: str) -> Coord:
    """Parses a 'row-col' id back into a coordinate."""
    parts = str(key).strip().split('-')
    if len(parts) != 2:
        raise ValueError(f'Invalid cell id: {key!r}')
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f'Invalid cell id: {key!r}') from None


@dataclass(frozen=True)
class Cell:
    """One grid position: immutable identity, a hidden-or-shown value and a lifecycle state."""
    row: int
    col: int
    value: Optional[int]  # None only for the void cell
    state: CellState

    @property
    def id(self) -> str:
        return cell_key(self.row, self.col)

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def visible_value(self) -> Optional[int]:
        """The value the player can see, or None for blank cells."""
        if self.state in HIDDEN_STATES:
            return None
        return self.value

    def with_state(self, state: CellState) -> 'Cell':
        if state == self.state:
            return self
        return replace(self, state=state)


@dataclass(frozen=True)
class Board:
    """Represents the square grid of cells. Boards are values: every mutation returns a new Board."""
    size: int
    cells: Tuple[Cell, ...]  # row-major, length == size * size

    def __post_init__(self) -> None:
        if len(self.cells) != self.size * self.size:
            raise ValueError(f'Expected {self.size * self.size} cells, got {len(self.cells)}')

    @property
    def center(self) -> Coord:
        mid = self.size // 2
        return (mid, mid)

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * self.size + c

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def at(self, r: int, c: int) -> Cell:
        """Gets the cell at a given row and column. No wrap-around: out-of-range raises."""
        if not self.in_bounds(r, c):
            raise ValueError(f'Cell ({r}, {c}) is outside a {self.size}x{self.size} board')
        return self.cells[self.index(r, c)]

    def get(self, coord: Optional[Coord]) -> Optional[Cell]:
        """Like at(), but returns None for a missing or out-of-range coordinate."""
        if coord is None:
            return None
        r, c = coord
        if not self.in_bounds(r, c):
            return None
        return self.cells[self.index(r, c)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def rows(self) -> List[Tuple[Cell, ...]]:
        return [self.cells[r * self.size:(r + 1) * self.size] for r in range(self.size)]

    def cells_in(self, *states: CellState) -> Iterator[Cell]:
        for cell in self.cells:
            if cell.state in states:
                yield cell

    def count(self, *states: CellState) -> int:
        return sum(1 for _ in self.cells_in(*states))

    @property
    def playable_total(self) -> int:
        """Number of cells that can ever be opened (everything but the void)."""
        return len(self.cells) - self.count(VOID)

    def opened_count(self) -> int:
        """Cells that are neither covered nor void."""
        return sum(1 for cell in self.cells if cell.state not in (COVERED, VOID))

    def with_states(
        self,
        coords: Iterable[Coord],
        state: CellState,
        only_from: Optional[Tuple[CellState, ...]] = None,
    ) -> 'Board':
        """Returns a board with the given cells moved to `state`.

        Terminal cells (cleared, void) never change. When `only_from` is given, only
        cells currently in one of those states are touched.
        """
        targets = set(coords)
        if not targets:
            return self
        changed = False
        out: List[Cell] = []
        for cell in self.cells:
            if (
                cell.coord in targets
                and cell.state not in TERMINAL_STATES
                and (only_from is None or cell.state in only_from)
                and cell.state != state
            ):
                out.append(cell.with_state(state))
                changed = True
            else:
                out.append(cell)
        if not changed:
            return self
        return Board(size=self.size, cells=tuple(out))

    def pretty(self, show_hidden: bool = False) -> str:
        """Generates a human-readable string representation of the board."""
        lines: List[str] = ['    ' + ''.join(f' {c} ' for c in range(self.size))]
        for r, row in enumerate(self.rows()):
            parts: List[str] = []
            for cell in row:
                if cell.state == VOID:
                    parts.append('   ')
                elif cell.state == CLEARED:
                    parts.append(' · ')
                elif cell.state == COVERED:
                    parts.append(f' {cell.value}?' if show_hidden else ' # ')
                elif cell.state == SELECTING:
                    parts.append(f'[{cell.value}]')
                elif cell.state == SUCCESS:
                    parts.append(f'({cell.value})')
                else:
                    parts.append(f' {cell.value} ')
            lines.append(f'{r:>2}  ' + ''.join(parts))
        return '\n'.join(lines)
