from exam_player import db
from datetime import datetime, timezone
import json
import uuid


def _utcnow():
    return datetime.now(timezone.utc)


class ScoreRecord(db.Model):
    __tablename__ = 'score_record'
    id = db.Column(db.Integer, primary_key=True)
    task_id = db.Column(db.String(64), nullable=False, index=True)
    # ISO-8601 as submitted by the player; kept verbatim so GET echoes it back
    date = db.Column(db.String(32), nullable=False)
    correct = db.Column(db.Integer, nullable=False)
    total = db.Column(db.Integer, nullable=False)
    pct = db.Column(db.Integer, nullable=False)
    elapsed_seconds = db.Column(db.Integer, nullable=True)
    question_file = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_dict(self):
        data = {
            'taskId': self.task_id,
            'date': self.date,
            'correct': self.correct,
            'total': self.total,
            'pct': self.pct,
        }
        if self.elapsed_seconds is not None:
            data['elapsedSeconds'] = self.elapsed_seconds
        if self.question_file:
            data['questionFile'] = self.question_file
        return data


def generate_answer_id():
    return uuid.uuid4().hex


class AnswerSubmission(db.Model):
    __tablename__ = 'answer_submission'
    id = db.Column(db.Integer, primary_key=True)
    answer_id = db.Column(db.String(32), unique=True, index=True, nullable=False, default=generate_answer_id)
    task_id = db.Column(db.String(64), nullable=False)
    problem_id = db.Column(db.String(255), nullable=False, index=True)
    response = db.Column(db.Text, nullable=False)
    question = db.Column(db.Text, nullable=True)  # JSON-encoded question payload
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_dict(self):
        return {
            'answerId': self.answer_id,
            'taskId': self.task_id,
            'problemId': self.problem_id,
            'response': self.response,
            'question': json.loads(self.question) if self.question else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
