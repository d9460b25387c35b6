import math
from datetime import datetime, timezone
from typing import Optional

MODULE2_HARD = 'module2Hard'
MODULE2_EASY = 'module2Easy'

HARD_BRANCH_THRESHOLD_PCT = 70

# (inclusive lower bound, label) checked top-down, then the floor label.
HARD_BANDS = [(90, '5.5–6.0'), (75, '4.5–5.0'), (60, '3.5–4.0')]
HARD_FLOOR = '–3.5'
EASY_BANDS = [(90, '3.5–4.0'), (75, '3.0–3.5'), (60, '2.5–3.0')]
EASY_FLOOR = '–2.5'


def raw_percentage(correct: int, total: int) -> float:
    if total <= 0:
        return 0
    return correct / total * 100


def percentage(correct: int, total: int) -> int:
    """Percentage rounded half up (12.5 -> 13), 0 when nothing was answered."""
    if total <= 0:
        return 0
    return int(math.floor(raw_percentage(correct, total) + 0.5))


def branch_for(module1_correct: int, module1_total: int) -> str:
    """Pick the module 2 track from the unrounded module 1 percentage.

    The rounded value shown to the test-taker is not consulted: 69.6% is
    displayed as 70% but still routes to the easy track.
    """
    if raw_percentage(module1_correct, module1_total) >= HARD_BRANCH_THRESHOLD_PCT:
        return MODULE2_HARD
    return MODULE2_EASY


def band_score(total_pct: int, hard: bool) -> str:
    bands, floor = (HARD_BANDS, HARD_FLOOR) if hard else (EASY_BANDS, EASY_FLOOR)
    for lower, label in bands:
        if total_pct >= lower:
            return label
    return floor


def iso_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_score_record(task_id: str, correct: int, total: int, elapsed_seconds=0,
                       question_file: Optional[str] = None,
                       now: Optional[datetime] = None) -> Optional[dict]:
    """Build the record submitted once per completed session.

    Returns None for zero-question sessions, which are never stored.
    """
    if total == 0:
        return None
    record = {
        'taskId': task_id,
        'date': iso_timestamp(now),
        'correct': correct,
        'total': total,
        'pct': percentage(correct, total),
        'elapsedSeconds': max(0, math.floor(elapsed_seconds or 0)),
    }
    if question_file:
        record['questionFile'] = question_file
    return record
