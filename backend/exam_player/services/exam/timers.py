"""Per-screen exam timers: a free-running stopwatch and a module countdown.

Neither timer is shared. Each owns at most one pending tick on its clock and
cancels it on stop, reset and close.
"""

import logging
from typing import Callable, Optional

from .timefmt import format_mm_ss

logger = logging.getLogger(__name__)

TICK_MS = 1000
WARNING_SECONDS = 60


class Stopwatch:
    """Elapsed-time tracker.

    Elapsed time is always recomputed from the clock delta since the last
    start(), never accumulated by counting ticks, so throttled or late ticks
    cannot make it drift. The tick only notifies ``on_tick`` for re-rendering
    and is not scheduled at all without a listener.
    """

    def __init__(self, clock, on_tick: Optional[Callable[[int], None]] = None):
        self._clock = clock
        self._on_tick = on_tick
        self._started_at = None
        self._base_seconds = 0
        self._tick = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return self._base_seconds
        return self._base_seconds + int((self._clock.now() - self._started_at) // 1000)

    @property
    def display(self) -> str:
        return format_mm_ss(self.elapsed_seconds)

    def start(self) -> None:
        if self._started_at is not None:
            return
        self._started_at = self._clock.now()
        if self._on_tick is not None:
            self._tick = self._clock.call_every(TICK_MS, self._sync)

    def stop(self) -> int:
        if self._started_at is None:
            return self._base_seconds
        total = self.elapsed_seconds
        self._base_seconds = total
        self._started_at = None
        self._clear()
        return total

    def reset(self) -> None:
        self._started_at = None
        self._base_seconds = 0
        self._clear()

    def close(self) -> None:
        """Dispose: freeze the elapsed value and cancel the tick."""
        self.stop()

    def _sync(self) -> None:
        if self._on_tick is not None:
            self._on_tick(self.elapsed_seconds)

    def _clear(self) -> None:
        if self._tick is not None:
            self._tick.cancel()
            self._tick = None


class Countdown:
    """Fixed-budget countdown that calls ``on_expire`` once on reaching zero.

    stop() and reset() never trigger ``on_expire``; callers rely on that to
    tell a user's early submit apart from a time-out auto-submit.
    """

    def __init__(self, clock, initial_seconds: int, on_expire: Optional[Callable[[], None]] = None):
        self._clock = clock
        self.initial_seconds = int(initial_seconds)
        self.seconds = self.initial_seconds
        self._on_expire = on_expire
        self._tick = None
        self._expired_fired = False

    @property
    def running(self) -> bool:
        return self._tick is not None

    @property
    def display(self) -> str:
        return format_mm_ss(self.seconds)

    @property
    def is_warning(self) -> bool:
        return 0 < self.seconds <= WARNING_SECONDS

    @property
    def is_expired(self) -> bool:
        return self.seconds == 0

    def start(self) -> None:
        if self._tick is not None:
            return
        self._expired_fired = False
        self._tick = self._clock.call_every(TICK_MS, self.tick)

    def stop(self) -> None:
        self._clear()

    def reset(self) -> None:
        self._clear()
        self.seconds = self.initial_seconds

    def close(self) -> None:
        self._clear()

    def tick(self) -> None:
        """Advance one second. Called by the clock while running."""
        if self._tick is None:
            return
        if self.seconds <= 1:
            self._clear()
            self.seconds = 0
            if not self._expired_fired:
                self._expired_fired = True
                logger.info(f"[countdown-expire] budget={self.initial_seconds}s")
                if self._on_expire is not None:
                    self._on_expire()
            return
        self.seconds -= 1

    def to_dict(self) -> dict:
        return {
            'seconds': self.seconds,
            'display': self.display,
            'isWarning': self.is_warning,
            'isExpired': self.is_expired,
            'running': self.running,
        }

    def _clear(self) -> None:
        if self._tick is not None:
            self._tick.cancel()
            self._tick = None
