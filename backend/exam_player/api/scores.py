from flask import Blueprint, jsonify, request, current_app
from exam_player.services.exam.history import list_scores, save_score, clear_scores
from exam_player.services.exam.scoring import iso_timestamp, percentage
from exam_player.services.exam.tasks import is_known_task


scores = Blueprint('scores', __name__)


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@scores.route('', methods=['GET'])
def get_scores():
    task_id = request.args.get('taskId')
    return jsonify([row.to_dict() for row in list_scores(task_id)])


@scores.route('', methods=['POST'])
def post_score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'JSON object body is required'}), 400

    task_id = data.get('taskId')
    correct = data.get('correct')
    total = data.get('total')
    if not is_known_task(task_id):
        return jsonify({'error': f'Unknown taskId: {task_id!r}'}), 400
    if not _is_count(correct) or not _is_count(total):
        return jsonify({'error': 'correct and total must be non-negative integers'}), 400
    if correct > total:
        return jsonify({'error': 'correct cannot exceed total'}), 400

    if total == 0:
        # Zero-question sessions are never stored
        return jsonify({'ok': True, 'skipped': True})

    elapsed = data.get('elapsedSeconds')
    if elapsed is not None and (isinstance(elapsed, bool) or not isinstance(elapsed, (int, float)) or elapsed < 0):
        return jsonify({'error': 'elapsedSeconds must be a non-negative number'}), 400

    pct = data.get('pct')
    if pct is None:
        pct = percentage(correct, total)
    elif not _is_count(pct) or pct > 100:
        return jsonify({'error': 'pct must be an integer between 0 and 100'}), 400

    date = data.get('date')
    if date is not None and (not isinstance(date, str) or len(date) > 32):
        return jsonify({'error': 'date must be an ISO-8601 string'}), 400
    question_file = data.get('questionFile')
    if question_file is not None and (not isinstance(question_file, str) or len(question_file) > 255):
        return jsonify({'error': 'questionFile must be a string'}), 400

    record = {
        'taskId': task_id,
        'date': date or iso_timestamp(),
        'correct': correct,
        'total': total,
        'pct': pct,
        'elapsedSeconds': int(elapsed) if elapsed is not None else None,
        'questionFile': question_file or None,
    }
    save_score(record)
    current_app.logger.info(f"[scores] stored task={task_id} {correct}/{total}")
    return jsonify({'ok': True}), 201


@scores.route('', methods=['DELETE'])
def delete_scores():
    clear_scores()
    return jsonify({'ok': True})
