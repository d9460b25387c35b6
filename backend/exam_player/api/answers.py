from flask import Blueprint, jsonify, request
from exam_player.models import AnswerSubmission
from exam_player.services.exam.submissions import save_answer


answers = Blueprint('answers', __name__)


@answers.route('', methods=['POST'])
def submit_answer():
    data = request.get_json(silent=True) or {}
    task_id = data.get('taskId')
    problem_id = data.get('problemId')
    response = data.get('response')

    if not all(isinstance(v, str) and v.strip() for v in (task_id, problem_id, response)):
        return jsonify({'error': 'taskId, problemId and a non-empty response are required'}), 400

    answer = save_answer(task_id, problem_id, response, data.get('question'))
    return jsonify({'answerId': answer.answer_id}), 201


@answers.route('/<string:answer_id>', methods=['GET'])
def get_answer(answer_id):
    answer = AnswerSubmission.query.filter_by(answer_id=answer_id).first_or_404()
    return jsonify(answer.to_dict())
