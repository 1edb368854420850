from __future__ import annotations

import random
from typing import List, Optional, Set, Union

from .board import BOARD_SIZE, COVERED, REVEALED, VOID, Board, Cell, Coord

MIN_VALUE = 1
MAX_VALUE = 9


def ring_coords(size: int = BOARD_SIZE) -> List[Coord]:
    """The 8 cells around the board's center, row-major."""
    mid = size // 2
    return [
        (mid + dr, mid + dc)
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
        if (dr, dc) != (0, 0)
    ]


def deal_board(seed: Union[int, random.Random, None] = None, size: int = BOARD_SIZE) -> Board:
    """Deals a fresh board: void center, revealed ring, everything else covered.

    Every non-void cell gets an independent value in [1, 9], including covered ones,
    whose values exist from the start but stay hidden until revealed.
    """
    if size < 3 or size % 2 == 0:
        raise ValueError('Board size must be an odd number >= 3')
    rng = seed if isinstance(seed, random.Random) else random.Random(seed)
    mid = size // 2
    ring: Set[Coord] = set(ring_coords(size))
    cells: List[Cell] = []
    for r in range(size):
        for c in range(size):
            if (r, c) == (mid, mid):
                cells.append(Cell(r, c, None, VOID))
                continue
            state = REVEALED if (r, c) in ring else COVERED
            cells.append(Cell(r, c, rng.randint(MIN_VALUE, MAX_VALUE), state))
    return Board(size=size, cells=tuple(cells))


def board_from_rows(rows: List[List[Optional[int]]], states: Optional[List[List[str]]] = None) -> Board:
    """Builds a board from explicit values (and optionally states).

    Without `states`, the layout matches a fresh deal: void center, revealed ring,
    covered elsewhere. The center value is ignored; every other cell needs a value
    in [1, 9] or ValueError is raised.
    """
    size = len(rows)
    if any(len(row) != size for row in rows):
        raise ValueError('Board rows must form a square')
    mid = size // 2
    ring: Set[Coord] = set(ring_coords(size))
    cells: List[Cell] = []
    for r in range(size):
        for c in range(size):
            if states is not None:
                state = states[r][c]
            elif (r, c) == (mid, mid):
                state = VOID
            else:
                state = REVEALED if (r, c) in ring else COVERED
            value = None if state == VOID else rows[r][c]
            if state != VOID and (not isinstance(value, int) or not MIN_VALUE <= value <= MAX_VALUE):
                raise ValueError(f'Cell ({r}, {c}) needs a value in [{MIN_VALUE}, {MAX_VALUE}], got {value!r}')
            cells.append(Cell(r, c, value, state))
    return Board(size=size, cells=tuple(cells))
