from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Exam timers tick on Socket.IO background tasks; tests swap in a ManualClock
    from exam_player.services.exam.clock import SystemClock
    flask_app.extensions['exam_clock'] = SystemClock(
        socketio, heartbeat_sec=int(flask_app.config.get('TIMER_HEARTBEAT_SEC', 0))
    )

    from exam_player.main import main
    flask_app.register_blueprint(main)

    from exam_player.api.scores import scores
    flask_app.register_blueprint(scores, url_prefix='/api/scores')

    from exam_player.api.answers import answers
    flask_app.register_blueprint(answers, url_prefix='/api/answers')

    from exam_player.api.sessions import sessions
    flask_app.register_blueprint(sessions, url_prefix='/api/sessions')

    from exam_player.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @flask_app.errorhandler(404)
    def not_found(_exc):
        return jsonify({'error': 'Not found'}), 404

    @flask_app.errorhandler(405)
    def method_not_allowed(_exc):
        return jsonify({'error': 'Method not allowed'}), 405

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the score and answer tables."""
        import exam_player.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('scores-clear')
    def scores_clear_command():
        """Deletes every stored score record."""
        from exam_player.services.exam.history import clear_scores
        with flask_app.app_context():
            removed = clear_scores()
            print(f'Removed {removed} score record(s).')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(scores_clear_command)

    return flask_app
