"""Score history persistence: one ScoreRecord row per completed session."""

import logging
from typing import List, Optional

from exam_player import db
from exam_player.models import ScoreRecord

logger = logging.getLogger(__name__)


def save_score(record: Optional[dict]) -> Optional[ScoreRecord]:
    """Persist a record built by build_score_record().

    Zero-question records (None, or total == 0) are skipped.
    """
    if not record or not record.get('total'):
        return None
    row = ScoreRecord(
        task_id=record['taskId'],
        date=record['date'],
        correct=record['correct'],
        total=record['total'],
        pct=record['pct'],
        elapsed_seconds=record.get('elapsedSeconds'),
        question_file=record.get('questionFile'),
    )
    db.session.add(row)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"[score-save] task={row.task_id} correct={row.correct}/{row.total} pct={row.pct}")
    return row


def list_scores(task_id: Optional[str] = None) -> List[ScoreRecord]:
    query = ScoreRecord.query
    if task_id:
        query = query.filter_by(task_id=task_id)
    return query.order_by(ScoreRecord.id).all()


def clear_scores() -> int:
    removed = ScoreRecord.query.delete()
    db.session.commit()
    logger.info(f"[score-clear] removed={removed}")
    return removed
