from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .board import REVEALED, Board, Coord
from .cascade import apply_cascade
from .completion import has_playable_pairs
from .deal import deal_board
from .resolver import WINNING_SUM, resolve_pair
from .scheduler import ManualScheduler, PendingTask
from .selection import (
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

logger = logging.getLogger(__name__)

PLAYING = 'playing'
FAILED = 'failed'
COMPLETED = 'completed'

RESOLUTION_DELAY_MS = 120

FAILED_TITLE = 'System Overload'
FAILED_MESSAGE = 'You exploded. Restart to try again.'

Seed = Union[int, random.Random, None]


@dataclass
class GameSession:
    """Everything one game owns. Replaced wholesale on restart, never reused."""
    board: Board
    status: str = PLAYING
    mistakes: int = 0
    selection: Selection = EMPTY_SELECTION
    start: Optional[SelectionEntry] = None
    current_sum: int = 0
    sum_expression: str = SUM_PLACEHOLDER
    is_pointer_active: bool = False
    is_resolving: bool = False
    pending: Optional[PendingTask] = field(default=None, repr=False)

    @property
    def locked(self) -> bool:
        return self.status != PLAYING or self.is_resolving

    def teardown(self) -> None:
        if self.pending is not None:
            self.pending.cancel()
            self.pending = None


@dataclass(frozen=True)
class CellView:
    id: str
    row: int
    col: int
    value: Optional[int]  # None when blank
    state: str


@dataclass(frozen=True)
class SessionView:
    """Render-ready snapshot for the presentation shell."""
    grid: Tuple[Tuple[CellView, ...], ...]
    status: str
    mistakes: int
    sum_expression: str
    sum_highlight: bool
    opened_count: int
    total_playable: int
    opened_percent: int
    is_resolving: bool
    is_pointer_active: bool
    message: Optional[str]


class SessionController:
    """Owns the live game session and applies the interaction protocol to it.

    Requests that the current state doesn't allow (locked session, ineligible cell,
    no pick in progress) are ignored and leave the session untouched.
    """

    def __init__(self, scheduler=None, seed: Seed = None, board: Optional[Board] = None) -> None:
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._lock = threading.RLock()
        self.session = self._new_session(seed, board)

    # ---------- lifecycle ----------

    def _new_session(self, seed: Seed, board: Optional[Board] = None) -> GameSession:
        session = GameSession(board=board if board is not None else deal_board(seed))
        self._evaluate_completion(session)
        logger.debug('new session: status=%s revealed=%d', session.status, session.board.count(REVEALED))
        return session

    def restart(self, seed: Seed = None, board: Optional[Board] = None) -> GameSession:
        """Discards the current game (cancelling any pending cascade) and deals a new one."""
        with self._lock:
            old = self.session
            old.teardown()
            self.session = self._new_session(seed, board)
            logger.debug('restart: previous status=%s mistakes=%d', old.status, old.mistakes)
            return self.session

    def close(self) -> None:
        """Cancels any pending cascade. The controller shouldn't be used afterwards."""
        with self._lock:
            self.session.teardown()
            self.session.is_resolving = False

    # ---------- interaction protocol ----------

    def pointer_down(self, coord: Coord) -> bool:
        """Starts a pick on `coord`. Returns False when the request was ignored."""
        with self._lock:
            s = self.session
            if s.locked:
                return False
            started = begin_selection(s.board, coord)
            if started is None:
                return False
            s.board, s.start = started
            s.selection = (s.start,)
            s.current_sum = 0
            s.sum_expression = SUM_PLACEHOLDER
            s.is_pointer_active = True
            logger.debug('pick start %s value=%d', coord, s.start.value)
            return True

    def pointer_up(self, coord: Optional[Coord]) -> bool:
        """Ends the pick on the cell under the release point (None for no cell)."""
        with self._lock:
            s = self.session
            if s.locked or not s.is_pointer_active or s.start is None:
                return False
            s.is_pointer_active = False
            start, s.start = s.start, None
            s.board, pair = end_selection(s.board, start, coord)
            if not pair:
                logger.debug('pick cancelled at %s', coord)
                self._reset_selection(s)
                self._evaluate_completion(s)
                return True
            s.selection = pair
            s.current_sum = selection_sum(pair)
            s.sum_expression = sum_expression(pair)
            self._resolve(s, pair)
            return True

    def pointer_cancel(self) -> bool:
        return self.pointer_up(None)

    # ---------- resolution ----------

    def _resolve(self, s: GameSession, pair: Selection) -> None:
        outcome = resolve_pair(s.board, pair, s.mistakes)
        s.board = outcome.board
        if outcome.matched:
            s.is_resolving = True
            logger.debug('match %s', s.sum_expression)
            s.pending = self.scheduler.schedule(
                RESOLUTION_DELAY_MS, lambda: self._finish_resolution(s, pair)
            )
            return
        s.selection = EMPTY_SELECTION
        s.current_sum = 0
        s.mistakes = outcome.mistakes
        logger.debug('mismatch %s (mistakes=%d)', s.sum_expression, s.mistakes)
        if outcome.failed:
            s.status = FAILED
            logger.info('game failed after %d mistakes', s.mistakes)
            return
        self._evaluate_completion(s)

    def _finish_resolution(self, s: GameSession, pair: Selection) -> None:
        with self._lock:
            # A restart may have replaced the session while the timer was waiting.
            if s is not self.session or not s.is_resolving:
                return
            s.pending = None
            s.board = apply_cascade(s.board, pair, path_length=len(pair))
            s.selection = EMPTY_SELECTION
            s.current_sum = 0
            s.is_resolving = False
            logger.debug('cascade applied at pivot %s', pair[-1].coord)
            self._evaluate_completion(s)

    def _reset_selection(self, s: GameSession) -> None:
        s.board = revert_selecting(s.board)
        s.selection = EMPTY_SELECTION
        s.current_sum = 0
        s.sum_expression = SUM_PLACEHOLDER

    def _evaluate_completion(self, s: GameSession) -> bool:
        if s.status != PLAYING or s.is_pointer_active or s.is_resolving:
            return False
        if has_playable_pairs(s.board):
            return False
        s.status = COMPLETED
        logger.info('game completed: opened %d/%d', s.board.opened_count(), s.board.playable_total)
        return True

    # ---------- derived read-only metrics ----------

    @property
    def board(self) -> Board:
        return self.session.board

    @property
    def status(self) -> str:
        return self.session.status

    @property
    def mistakes(self) -> int:
        return self.session.mistakes

    @property
    def selection(self) -> Selection:
        return self.session.selection

    @property
    def is_resolving(self) -> bool:
        return self.session.is_resolving

    @property
    def is_pointer_active(self) -> bool:
        return self.session.is_pointer_active

    @property
    def locked(self) -> bool:
        return self.session.locked

    def opened_count(self) -> int:
        return self.session.board.opened_count()

    def opened_percent(self) -> int:
        total = self.session.board.playable_total
        if total <= 0:
            return 0
        return (self.opened_count() * 100) // total

    def sum_highlight(self) -> bool:
        s = self.session
        return len(s.selection) == 2 and s.current_sum == WINNING_SUM

    def message(self) -> Optional[str]:
        if self.session.status == COMPLETED:
            return f'You have defeated {self.opened_percent()}% of users.'
        if self.session.status == FAILED:
            return f'{FAILED_TITLE}: {FAILED_MESSAGE}'
        return None

    def view(self) -> SessionView:
        with self._lock:
            s = self.session
            grid: List[Tuple[CellView, ...]] = []
            for row in s.board.rows():
                grid.append(tuple(
                    CellView(id=cell.id, row=cell.row, col=cell.col, value=cell.visible_value, state=cell.state)
                    for cell in row
                ))
            return SessionView(
                grid=tuple(grid),
                status=s.status,
                mistakes=s.mistakes,
                sum_expression=s.sum_expression,
                sum_highlight=self.sum_highlight(),
                opened_count=self.opened_count(),
                total_playable=s.board.playable_total,
                opened_percent=self.opened_percent(),
                is_resolving=s.is_resolving,
                is_pointer_active=s.is_pointer_active,
                message=self.message(),
            )
