import json
import re
from typing import Optional

from exam_player import db
from exam_player.models import AnswerSubmission

_JSON_SUFFIX = re.compile(r'\.json$', re.IGNORECASE)


def build_problem_id(task_id: str, source_file: str, sub_question_id: Optional[str] = None) -> str:
    """Stable id for one problem: ``task/file`` or ``task/file#sub``."""
    file_id = _JSON_SUFFIX.sub('', source_file)
    if sub_question_id:
        return f"{task_id}/{file_id}#{sub_question_id}"
    return f"{task_id}/{file_id}"


def save_answer(task_id: str, problem_id: str, response: str, question=None) -> AnswerSubmission:
    answer = AnswerSubmission(
        task_id=task_id,
        problem_id=problem_id,
        response=response,
        question=json.dumps(question) if question is not None else None,
    )
    db.session.add(answer)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return answer
