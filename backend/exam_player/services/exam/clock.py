"""Time sources for the exam timers.

Timers read time and schedule their periodic ticks through a clock so the
same code runs against Socket.IO background tasks in production and against
a simulated clock in tests.
"""

import heapq
import itertools
import logging
import time
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)


class TickHandle:
    """Handle for a periodic callback. Cancelling twice is a no-op."""

    def __init__(self, callback: Callable[[], None], period_ms: int):
        self.callback = callback
        self.period_ms = period_ms
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class SystemClock:
    """Monotonic clock whose ticks run as Socket.IO background tasks."""

    def __init__(self, socketio, heartbeat_sec: int = 0):
        self._socketio = socketio
        self._heartbeat_sec = heartbeat_sec

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def call_every(self, period_ms: int, callback: Callable[[], None]) -> TickHandle:
        handle = TickHandle(callback, period_ms)
        self._socketio.start_background_task(self._worker, handle)
        return handle

    def _worker(self, handle: TickHandle) -> None:
        period = handle.period_ms / 1000.0
        # Sleep toward absolute deadlines so a slow callback does not push
        # every later tick back.
        next_due = time.monotonic() + period
        fired = 0
        while not handle.cancelled:
            self._socketio.sleep(max(0.0, next_due - time.monotonic()))
            if handle.cancelled:
                break
            handle.callback()
            fired += 1
            next_due += period
            if self._heartbeat_sec and fired % self._heartbeat_sec == 0:
                logger.debug(f"[timer-heartbeat] handle={id(handle)} ticks={fired}")


class ManualClock:
    """Simulated clock: time only moves when advance() is called."""

    def __init__(self, start_ms: int = 0):
        self._now = start_ms
        self._seq = itertools.count()
        self._queue: List[Tuple[int, int, TickHandle]] = []

    def now(self) -> int:
        return self._now

    def call_every(self, period_ms: int, callback: Callable[[], None]) -> TickHandle:
        handle = TickHandle(callback, period_ms)
        heapq.heappush(self._queue, (self._now + period_ms, next(self._seq), handle))
        return handle

    def advance(self, ms: int) -> None:
        """Move time forward by ms, firing due ticks in order."""
        target = self._now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            handle.callback()
            if not handle.cancelled:
                heapq.heappush(self._queue, (due + handle.period_ms, next(self._seq), handle))
        self._now = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)
