from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from scoreboard.errors import register_error_handlers
    register_error_handlers(flask_app)

    # Import and register blueprints here
    from scoreboard.routes import main
    flask_app.register_blueprint(main, url_prefix='/api')

    from scoreboard.api.matches import matches
    flask_app.register_blueprint(matches, url_prefix='/api/matches')

    from scoreboard.api.payments import payments
    flask_app.register_blueprint(payments, url_prefix='/api/payments')

    from scoreboard.api.admin import admin
    flask_app.register_blueprint(admin, url_prefix='/api/admin')

    from scoreboard.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # The ticker is owned by the app so each app has at most one driver
    from scoreboard.services.matches.scheduler import TickScheduler
    ticker = TickScheduler()
    flask_app.extensions['tick_scheduler'] = ticker

    if flask_app.config.get('TIMER_MODE') == 'continuous' and not flask_app.config.get('TESTING'):
        @flask_app.before_request
        def _ensure_ticker():
            if not ticker.running:
                ticker.start(flask_app)

    from scoreboard.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Not authenticated'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from scoreboard.models import Match
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            user = User(email='demo@kstv.com', name='Demo', is_payment_confirmed=True)
            user.set_password('password')
            db.session.add(user)
            db.session.flush()
            db.session.add(Match(user_id=user.id, team1_name='Home', team2_name='Away', timer_duration=2700))

            db.session.commit()
            print('Database has been reset and seeded!')

    @click.command('timers-catchup')
    @click.option('--seconds', type=int, default=None,
                  help='Cycles to replay. Defaults to the time elapsed since the last wake.')
    def timers_catchup_command(seconds):
        """Replays one tick per elapsed second (coarse-wake mode)."""
        cycles = ticker.catch_up(flask_app, seconds=seconds)
        print(f'Replayed {cycles} tick cycles.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(timers_catchup_command)

    return flask_app
