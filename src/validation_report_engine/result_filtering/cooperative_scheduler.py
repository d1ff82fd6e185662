"""Single-threaded scheduler for delayed, cancellable tasks."""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(order=True)
class ScheduledTask:
    """Handle for a callback waiting on the scheduler's clock."""

    due_ms: int
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class CooperativeScheduler:
    """Runs scheduled callbacks when its clock is advanced.

    Nothing runs in the background; callers pump the clock with ``advance``
    or drain it with ``run_pending``.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._queue: list[ScheduledTask] = []
        self._sequence = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative.")
        task = ScheduledTask(
            due_ms=self._now_ms + delay_ms,
            sequence=next(self._sequence),
            callback=callback,
        )
        heapq.heappush(self._queue, task)
        return task

    def pending_count(self) -> int:
        return sum(1 for task in self._queue if not task.cancelled)

    def advance(self, elapsed_ms: int) -> int:
        """Move the clock forward and run every task that became due.

        Returns:
          Number of callbacks executed.
        """
        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must not be negative.")
        target = self._now_ms + elapsed_ms
        executed = 0
        while self._queue and self._queue[0].due_ms <= target:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self._now_ms = task.due_ms
            task.callback()
            executed += 1
        self._now_ms = target
        return executed

    def run_pending(self) -> int:
        """Advance to the last due task and run everything still queued."""
        live = [task.due_ms for task in self._queue if not task.cancelled]
        if not live:
            return 0
        return self.advance(max(live) - self._now_ms)
