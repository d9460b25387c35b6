import os
import sys
import pytest

# Ensure the backend root (containing the `exam_player` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from exam_player import create_app, db, socketio
from exam_player.services.exam.clock import ManualClock


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MODULE1_DURATION_SEC = 0
    MODULE2_DURATION_SEC = 0
    TIMER_HEARTBEAT_SEC = 0
    SESSION_IDLE_TTL_SEC = 0


class TimedTestConfig(TestConfig):
    MODULE1_DURATION_SEC = 45
    MODULE2_DURATION_SEC = 30
    SESSION_IDLE_TTL_SEC = 600


def _build_app(config_class):
    application = create_app(config_class)
    application.extensions['exam_clock'] = ManualClock()
    return application


@pytest.fixture()
def clock():
    return ManualClock()


@pytest.fixture()
def flask_app():
    application = _build_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import exam_player.models  # noqa: F401
        db.create_all()
        yield application
        from exam_player.api.sessions import discard_all_runs
        discard_all_runs()
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def timed_app():
    application = _build_app(TimedTestConfig)
    with application.app_context():
        import exam_player.models  # noqa: F401
        db.create_all()
        yield application
        from exam_player.api.sessions import discard_all_runs
        discard_all_runs()
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
