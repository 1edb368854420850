from __future__ import annotations

# Facade module that re-exports the MineSum10 core.
# Used by the Flask app, the tools and the tests.
# Single-responsibility modules live under minesum_core/*.

from minesum_core.board import (  # noqa: F401
    BOARD_SIZE,
    CELL_STATES,
    CLEARED,
    COVERED,
    REVEALED,
    SELECTING,
    SUCCESS,
    VOID,
    Board,
    Cell,
    CellState,
    Coord,
    cell_key,
    parse_cell_key,
)
from minesum_core.deal import board_from_rows, deal_board, ring_coords  # noqa: F401
from minesum_core.selection import (  # noqa: F401
    EMPTY_SELECTION,
    SUM_PLACEHOLDER,
    Selection,
    SelectionEntry,
    begin_selection,
    end_selection,
    revert_selecting,
    selection_sum,
    sum_expression,
)
from minesum_core.resolver import (  # noqa: F401
    MISTAKE_LIMIT,
    WINNING_SUM,
    Resolution,
    is_match,
    resolve_pair,
)
from minesum_core.cascade import (  # noqa: F401
    apply_cascade,
    bonus_cells,
    clear_targets,
    cross_cells,
    reveal_targets,
    square_cells,
)
from minesum_core.completion import has_playable_pairs, has_playable_pairs_bruteforce  # noqa: F401
from minesum_core.scheduler import ManualScheduler, PendingTask, TimerScheduler  # noqa: F401
from minesum_core.session import (  # noqa: F401
    COMPLETED,
    FAILED,
    PLAYING,
    RESOLUTION_DELAY_MS,
    CellView,
    GameSession,
    SessionController,
    SessionView,
)


def main() -> None:
    # CLI driver delegated to minesum_core.cli
    from minesum_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
