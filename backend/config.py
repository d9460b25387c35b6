import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///exam_player.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Module countdown budgets (seconds). 0 disables the countdown for that module.
    MODULE1_DURATION_SEC = int(os.environ.get('MODULE1_DURATION_SEC', '1080'))
    MODULE2_DURATION_SEC = int(os.environ.get('MODULE2_DURATION_SEC', '1080'))
    # Optional: heartbeat interval for timer worker logs (ticks). 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
    # Live sessions idle this long are dropped when the next one is created. 0 keeps them.
    SESSION_IDLE_TTL_SEC = int(os.environ.get('SESSION_IDLE_TTL_SEC', '7200'))
