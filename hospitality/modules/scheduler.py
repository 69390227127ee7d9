"""
Scheduler Module - Hospitality Desk

Timer abstraction used by the scan session for its step-advance delay,
result overlay and scan cooldown. ``ThreadingScheduler`` runs callbacks on
timer threads; ``ManualScheduler`` keeps a virtual clock that tests advance
explicitly.
"""

import heapq
import itertools
import logging
import threading
from typing import Callable, List, Tuple


class TimerHandle:
    """Handle returned by ``call_later``; cancel() stops a pending callback."""

    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self):
        self._cancelled = True

    def _run(self):
        if not self._cancelled:
            self._callback()


class ThreadingScheduler:
    """Runs delayed callbacks on daemon ``threading.Timer`` threads."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ThreadTimerHandle(callback, self.logger)
        timer = threading.Timer(delay, handle._run)
        timer.daemon = True
        handle._timer = timer
        timer.start()
        return handle


class _ThreadTimerHandle(TimerHandle):

    def __init__(self, callback, logger):
        super().__init__(callback)
        self._timer = None
        self._logger = logger

    def cancel(self):
        super().cancel()
        if self._timer is not None:
            self._timer.cancel()

    def _run(self):
        try:
            super()._run()
        except Exception as e:
            self._logger.error(f"Scheduled callback failed: {str(e)}")


class ManualScheduler:
    """
    Virtual-time scheduler.

    Callbacks only run from ``advance``, in due-time order. A callback
    scheduled while advancing runs in the same call if it falls due before
    the new time.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(callback)
        heapq.heappush(self._queue, (self.now + delay, next(self._sequence), handle))
        return handle

    def advance(self, seconds: float):
        """Move the virtual clock forward, running callbacks that fall due."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self.now = due
            handle._run()
        self.now = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)
