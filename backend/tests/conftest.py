import os
import sys
import pytest

# Ensure the backend root (containing the `scoreboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scoreboard import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    CORS_ORIGINS = ['http://localhost:5173']
    TIMER_MODE = 'continuous'
    TICK_INTERVAL_SEC = 1
    CATCHUP_WINDOW_SEC = 60
    CATCHUP_MAX_SEC = 3600
    TIMER_HEARTBEAT_SEC = 0
    MIN_TIMER_DURATION_SEC = 60
    MAX_TIMER_DURATION_SEC = 7200
    ADMIN_EMAIL = 'admin@kstv.com'
    ADMIN_PASSWORD = 'admin-pass'
    ADMIN_SESSION_HOURS = 24
    ADMIN_COOKIE_SECURE = False
    PAYMENT_AMOUNT = 100


def _build_app(config_class):
    application = create_app(config_class)
    with application.app_context():
        # Ensure models are imported so tables are created
        import scoreboard.models  # noqa: F401
        db.create_all()
    return application


def _teardown_app(application):
    with application.app_context():
        db.session.remove()
        db.drop_all()


# No app context is held across a test: each request gets its own session and `g`.
@pytest.fixture()
def flask_app():
    application = _build_app(TestConfig)
    yield application
    _teardown_app(application)


@pytest.fixture()
def file_app(tmp_path):
    """App backed by a file database so worker threads get their own connections."""
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'scoreboard.db'}"

    application = _build_app(FileConfig)
    yield application
    _teardown_app(application)


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


def register_user(app, http, email='owner@example.com', name='Owner', confirmed=True):
    """Register through the API (which logs `http` in) and optionally confirm payment."""
    from scoreboard.models import User
    res = http.post('/api/register', json={'email': email, 'name': name, 'password': 'secret1'})
    assert res.status_code == 201
    user_id = res.get_json()['data']['id']
    if confirmed:
        with app.app_context():
            user = db.session.get(User, user_id)
            user.is_payment_confirmed = True
            db.session.commit()
    return user_id


def create_match(http, **overrides):
    body = {'team1_name': 'Dynamo', 'team2_name': 'Shakhtar', 'timer_duration': 2700, 'design_theme': 'classic'}
    body.update(overrides)
    res = http.post('/api/matches', json=body)
    assert res.status_code == 201, res.get_json()
    return res.get_json()['data']


@pytest.fixture()
def owner_id(flask_app, client):
    return register_user(flask_app, client)


@pytest.fixture()
def match(client, owner_id):
    return create_match(client)


@pytest.fixture()
def ticker(flask_app):
    return flask_app.extensions['tick_scheduler']
