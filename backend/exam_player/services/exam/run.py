import logging
import threading
import uuid
from typing import Callable, Optional

from .adaptive import AdaptiveSession, Phase
from .scoring import build_score_record
from .tasks import ADAPTIVE_TASK_ID
from .timers import Countdown, Stopwatch

logger = logging.getLogger(__name__)


class ExamRun:
    """One test-taker's pass through the adaptive exam.

    Composes the session state machine with a whole-session stopwatch and a
    countdown per module. A module countdown running out auto-submits that
    module; finishing it explicitly stops the countdown first so expiry can
    no longer fire.

    Transitions re-check the phase under a lock shared with countdown
    expiry, so a module finishes once whichever path gets there first.
    Each transition returns False when the run was not in the phase it
    applies to.

    ``on_change(run)`` is called after every transition and
    ``on_complete(run, record)`` once the session completes. ``record`` is
    None when no questions were answered.
    """

    def __init__(self, clock, task_id: Optional[str] = None, question_file: Optional[str] = None,
                 module1_seconds: int = 0, module2_seconds: int = 0,
                 on_change: Optional[Callable] = None, on_complete: Optional[Callable] = None,
                 on_expire: Optional[Callable] = None):
        self.id = uuid.uuid4().hex
        self.task_id = task_id or ADAPTIVE_TASK_ID
        self.question_file = question_file
        self.session = AdaptiveSession()
        self.stopwatch = Stopwatch(clock)
        self.record = None
        self._clock = clock
        self._durations = {Phase.MODULE1: int(module1_seconds or 0), Phase.MODULE2: int(module2_seconds or 0)}
        self._on_change = on_change
        self._on_complete = on_complete
        self._on_expire = on_expire
        self._lock = threading.RLock()
        self.countdown = None
        self.last_activity = clock.now()
        self.stopwatch.start()
        self._arm_countdown(Phase.MODULE1)
        logger.info(f"[session-create] id={self.id} task={self.task_id}")

    # ---- answer recording ----
    def record_answer(self, correct: bool) -> bool:
        with self._lock:
            if self.session.phase is Phase.MODULE1:
                self.session.record_module1_answer(correct)
            elif self.session.phase is Phase.MODULE2:
                self.session.record_module2_answer(correct)
            else:
                return False
            self._changed()
            return True

    # ---- transitions ----
    def finish_module1(self) -> bool:
        with self._lock:
            if self.session.phase is not Phase.MODULE1:
                return False
            self._disarm_countdown()
            branch = self.session.finish_module1()
            logger.info(
                f"[session-branch] id={self.id} module1={self.session.module1_correct}/{self.session.module1_total} branch={branch.value}"
            )
            self._changed()
            return True

    def start_module2(self) -> bool:
        with self._lock:
            if self.session.phase is not Phase.BRANCHING:
                return False
            self.session.start_module2()
            self._arm_countdown(Phase.MODULE2)
            self._changed()
            return True

    def finish_module2(self) -> bool:
        with self._lock:
            if self.session.phase is not Phase.MODULE2:
                return False
            self._disarm_countdown()
            elapsed = self.stopwatch.stop()
            self.session.finish_module2()
            self.record = build_score_record(
                self.task_id,
                self.session.total_correct,
                self.session.total_questions,
                elapsed,
                question_file=self.question_file,
            )
            logger.info(
                f"[session-complete] id={self.id} correct={self.session.total_correct}/{self.session.total_questions} "
                f"band={self.session.band_score()} elapsed={elapsed}s"
            )
            self._changed()
            if self._on_complete is not None:
                self._on_complete(self, self.record)
            self.close()
            return True

    def reset(self) -> None:
        with self._lock:
            self._disarm_countdown()
            self.session.reset()
            self.stopwatch.reset()
            self.stopwatch.start()
            self.record = None
            self._arm_countdown(Phase.MODULE1)
            logger.info(f"[session-reset] id={self.id}")
            self._changed()

    def close(self) -> None:
        """Release every pending timer tick. The run stays readable."""
        self._disarm_countdown()
        self.stopwatch.close()

    def idle_seconds(self) -> float:
        return (self._clock.now() - self.last_activity) / 1000.0

    # ---- countdown wiring ----
    def _arm_countdown(self, phase: Phase) -> None:
        seconds = self._durations.get(phase, 0)
        if seconds <= 0:
            self.countdown = None
            return
        self.countdown = Countdown(self._clock, seconds, on_expire=lambda: self._expire(phase))
        self.countdown.start()

    def _disarm_countdown(self) -> None:
        if self.countdown is not None:
            self.countdown.stop()

    def _expire(self, phase: Phase) -> None:
        with self._lock:
            if self.session.phase is not phase:
                logger.info(f"[session-expire-abort] id={self.id} expected={phase.value} actual={self.session.phase.value}")
                return
            logger.info(f"[session-expire] id={self.id} phase={phase.value}")
            if self._on_expire is not None:
                self._on_expire(self, phase)
            if phase is Phase.MODULE1:
                self.finish_module1()
            else:
                self.finish_module2()

    def _changed(self) -> None:
        self.last_activity = self._clock.now()
        if self._on_change is not None:
            self._on_change(self)

    def to_dict(self) -> dict:
        payload = {
            'id': self.id,
            'taskId': self.task_id,
            'questionFile': self.question_file,
            'elapsedSeconds': self.stopwatch.elapsed_seconds,
            'elapsed': self.stopwatch.display,
            'countdown': self.countdown.to_dict() if self.countdown is not None else None,
            'record': self.record,
        }
        payload.update(self.session.snapshot())
        return payload
