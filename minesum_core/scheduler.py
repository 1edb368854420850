from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

Callback = Callable[[], None]


@dataclass
class PendingTask:
    """Handle for one deferred action. Cancelling a task that already ran is a no-op."""
    due_ms: int
    callback: Callback
    cancelled: bool = False
    done: bool = False
    _timer: Optional[threading.Timer] = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self) -> None:
        if not self.active:
            return
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def fire(self) -> None:
        if not self.active:
            return
        self.done = True
        self.callback()


class ManualScheduler:
    """Scheduler driven by a virtual clock; nothing runs until advance() or run_pending().

    Used by the CLI and the tests so the resolution delay is deterministic.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._tasks: List[PendingTask] = []

    def schedule(self, delay_ms: int, callback: Callback) -> PendingTask:
        task = PendingTask(due_ms=self.now_ms + max(0, int(delay_ms)), callback=callback)
        self._tasks.append(task)
        return task

    def pending(self) -> List[PendingTask]:
        return [t for t in self._tasks if t.active]

    def advance(self, ms: int) -> int:
        """Moves the clock forward and fires every task that came due. Returns how many ran."""
        self.now_ms += max(0, int(ms))
        ran = 0
        # Callbacks may schedule more work; keep going until nothing due is left.
        while True:
            due = sorted((t for t in self._tasks if t.active and t.due_ms <= self.now_ms), key=lambda t: t.due_ms)
            if not due:
                break
            for task in due:
                task.fire()
                ran += 1
        self._tasks = [t for t in self._tasks if t.active]
        return ran

    def run_pending(self) -> int:
        """Fires everything still pending, jumping the clock to the latest due time."""
        tasks = self.pending()
        if not tasks:
            return 0
        return self.advance(max(t.due_ms for t in tasks) - self.now_ms)


class TimerScheduler:
    """Scheduler backed by threading.Timer; callbacks run on the timer thread."""

    def schedule(self, delay_ms: int, callback: Callback) -> PendingTask:
        task = PendingTask(due_ms=int(delay_ms), callback=callback)
        timer = threading.Timer(max(0, int(delay_ms)) / 1000.0, task.fire)
        timer.daemon = True
        task._timer = timer
        timer.start()
        return task
