from game import board_from_rows, ring_coords

# Ring order (row-major): (3,3) (3,4) (3,5) (4,3) (4,5) (5,3) (5,4) (5,5)


def make_board(ring_values, fill=1):
    """A 9x9 board laid out like a fresh deal, with explicit ring values."""
    rows = [[fill] * 9 for _ in range(9)]
    for (r, c), v in zip(ring_coords(9), ring_values):
        rows[r][c] = v
    return board_from_rows(rows)


class ScriptedInput:
    """Feeds lines to a read() callback, then raises EOFError."""

    def __init__(self, lines):
        self._lines = list(lines)

    def __call__(self, prompt=''):
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)
