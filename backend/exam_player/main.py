from flask import Blueprint, jsonify
from exam_player.services.exam.tasks import TASK_IDS

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Practice exam player API'})

@main.route('/api/tasks')
def list_tasks():
    return jsonify(list(TASK_IDS))
