from flask import Blueprint, abort, jsonify, request, current_app
from exam_player import socketio
from exam_player.services.exam.adaptive import Phase
from exam_player.services.exam.history import save_score
from exam_player.services.exam.run import ExamRun
from exam_player.services.exam.tasks import is_known_task
from typing import Dict


sessions = Blueprint('sessions', __name__)

# Live runs, keyed by run id (runtime-only; not persisted)
_runs: Dict[str, ExamRun] = {}


def _emit_state(run: ExamRun) -> None:
    socketio.emit('state_update', {'session_id': run.id}, to=f"session:{run.id}", namespace='/ws')


def _make_listeners(app):
    def on_complete(run: ExamRun, record) -> None:
        # May fire from a countdown tick outside any request
        with app.app_context():
            stored = save_score(record)
            if stored is None:
                app.logger.info(f"[session-complete] id={run.id} no answers recorded; score not stored")

    def on_expire(run: ExamRun, phase: Phase) -> None:
        socketio.emit('module_expired', {'session_id': run.id, 'module': phase.value},
                      to=f"session:{run.id}", namespace='/ws')

    return on_complete, on_expire


def _get_run(session_id: str) -> ExamRun:
    run = _runs.get(session_id)
    if run is None:
        abort(404)
    return run


def _wrong_phase(run: ExamRun, action: str):
    return jsonify({'error': f"Cannot {action} while session is in phase '{run.session.phase.value}'"}), 409


def evict_idle_runs(ttl_seconds: float) -> int:
    """Close and drop runs with no activity for ttl_seconds. 0 disables eviction."""
    if ttl_seconds <= 0:
        return 0
    stale = [rid for rid, run in _runs.items() if run.idle_seconds() >= ttl_seconds]
    for rid in stale:
        _runs.pop(rid).close()
        current_app.logger.info(f"[session-evict] id={rid}")
    return len(stale)


def discard_all_runs() -> None:
    """Dispose every live run and its timers."""
    for run in list(_runs.values()):
        run.close()
    _runs.clear()


@sessions.route('', methods=['POST'])
def create_session():
    data = request.get_json(silent=True) or {}
    task_id = data.get('taskId')
    if task_id is not None and not is_known_task(task_id):
        return jsonify({'error': f'Unknown taskId: {task_id!r}'}), 400
    question_file = data.get('questionFile')
    if question_file is not None and (not isinstance(question_file, str) or len(question_file) > 255):
        return jsonify({'error': 'questionFile must be a string'}), 400

    evict_idle_runs(float(current_app.config.get('SESSION_IDLE_TTL_SEC', 0)))

    app = current_app._get_current_object()
    on_complete, on_expire = _make_listeners(app)
    run = ExamRun(
        app.extensions['exam_clock'],
        task_id=task_id,
        question_file=question_file,
        module1_seconds=int(app.config.get('MODULE1_DURATION_SEC', 0)),
        module2_seconds=int(app.config.get('MODULE2_DURATION_SEC', 0)),
        on_change=_emit_state,
        on_complete=on_complete,
        on_expire=on_expire,
    )
    _runs[run.id] = run
    return jsonify(run.to_dict()), 201


@sessions.route('/<string:session_id>', methods=['GET'])
def get_session(session_id):
    return jsonify(_get_run(session_id).to_dict())


@sessions.route('/<string:session_id>', methods=['DELETE'])
def delete_session(session_id):
    run = _get_run(session_id)
    run.close()
    _runs.pop(session_id, None)
    current_app.logger.info(f"[session-delete] id={session_id}")
    return jsonify({'ok': True})


@sessions.route('/<string:session_id>/answers', methods=['POST'])
def record_answer(session_id):
    run = _get_run(session_id)
    data = request.get_json(silent=True) or {}
    correct = data.get('correct')
    if not isinstance(correct, bool):
        return jsonify({'error': 'correct must be a boolean'}), 400
    if not run.record_answer(correct):
        return _wrong_phase(run, 'record an answer')
    return jsonify(run.to_dict())


@sessions.route('/<string:session_id>/finish-module1', methods=['POST'])
def finish_module1(session_id):
    run = _get_run(session_id)
    if not run.finish_module1():
        return _wrong_phase(run, 'finish module 1')
    return jsonify(run.to_dict())


@sessions.route('/<string:session_id>/start-module2', methods=['POST'])
def start_module2(session_id):
    run = _get_run(session_id)
    if not run.start_module2():
        return _wrong_phase(run, 'start module 2')
    return jsonify(run.to_dict())


@sessions.route('/<string:session_id>/finish-module2', methods=['POST'])
def finish_module2(session_id):
    run = _get_run(session_id)
    if not run.finish_module2():
        return _wrong_phase(run, 'finish module 2')
    return jsonify(run.to_dict())


@sessions.route('/<string:session_id>/reset', methods=['POST'])
def reset_session(session_id):
    run = _get_run(session_id)
    run.reset()
    return jsonify(run.to_dict())
