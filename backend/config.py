import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///scoreboard.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
    ).split(',') if o.strip()]
    # 'continuous': in-process ticker started on first request
    # 'coarse': ticks are replayed by `flask timers-catchup` from an external cron
    TIMER_MODE = os.environ.get('TIMER_MODE', 'continuous')
    TICK_INTERVAL_SEC = float(os.environ.get('TICK_INTERVAL_SEC', '1'))
    # Coarse wake: cycles replayed when no checkpoint exists, and the hard cap per wake
    CATCHUP_WINDOW_SEC = int(os.environ.get('CATCHUP_WINDOW_SEC', '60'))
    CATCHUP_MAX_SEC = int(os.environ.get('CATCHUP_MAX_SEC', '3600'))
    # Optional: heartbeat interval for ticker logs (sec). 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
    # Half length bounds (seconds)
    MIN_TIMER_DURATION_SEC = int(os.environ.get('MIN_TIMER_DURATION_SEC', '60'))
    MAX_TIMER_DURATION_SEC = int(os.environ.get('MAX_TIMER_DURATION_SEC', '7200'))
    # Admin panel
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', 'admin@kstv.com')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'change-me')
    ADMIN_SESSION_HOURS = int(os.environ.get('ADMIN_SESSION_HOURS', '24'))
    ADMIN_COOKIE_SECURE = os.environ.get('ADMIN_COOKIE_SECURE', '1') == '1'
    # Fixed activation fee
    PAYMENT_AMOUNT = int(os.environ.get('PAYMENT_AMOUNT', '100'))
