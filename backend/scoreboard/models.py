from datetime import datetime, timezone
from scoreboard import db, bcrypt
from flask_login import UserMixin
from scoreboard.services.matches.timer import TimerState, display_time, format_clock

DESIGN_THEMES = ('classic', 'dark')


def utcnow():
    """Naive UTC timestamp; SQLite drops tzinfo anyway."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value):
    return value.isoformat() if value else None


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(128), nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    is_payment_confirmed = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    matches = db.relationship('Match', back_populates='owner', lazy='dynamic')
    payments = db.relationship('Payment', back_populates='user', lazy='dynamic')

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'is_admin': self.is_admin,
            'is_payment_confirmed': self.is_payment_confirmed,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }


class Match(db.Model):
    __tablename__ = 'match'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    team1_name = db.Column(db.String(64), nullable=False)
    team2_name = db.Column(db.String(64), nullable=False)
    team1_logo_url = db.Column(db.String(512), nullable=True)
    team2_logo_url = db.Column(db.String(512), nullable=True)
    team1_score = db.Column(db.Integer, default=0, nullable=False)
    team2_score = db.Column(db.Integer, default=0, nullable=False)
    timer_duration = db.Column(db.Integer, nullable=False)
    # Clock: seconds elapsed within the current half
    current_time = db.Column(db.Integer, default=0, nullable=False)
    is_timer_running = db.Column(db.Boolean, default=False, nullable=False, index=True)
    current_half = db.Column(db.Integer, default=1, nullable=False)
    half_time_offset = db.Column(db.Integer, default=0, nullable=False)
    is_visible = db.Column(db.Boolean, default=True, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    design_theme = db.Column(db.String(16), default='classic', nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    owner = db.relationship('User', back_populates='matches')

    def timer_state(self) -> TimerState:
        return TimerState(
            timer_duration=self.timer_duration,
            current_time=self.current_time or 0,
            is_timer_running=bool(self.is_timer_running),
            current_half=self.current_half or 1,
            half_time_offset=self.half_time_offset or 0,
        )

    def apply_timer_state(self, state: TimerState) -> None:
        # All five clock fields are written together so a row never mixes two states
        self.timer_duration = state.timer_duration
        self.current_time = state.current_time
        self.is_timer_running = state.is_timer_running
        self.current_half = state.current_half
        self.half_time_offset = state.half_time_offset

    @property
    def display_time(self) -> int:
        return display_time(self.timer_state())

    def to_dict(self):
        shown = self.display_time
        return {
            'id': self.id,
            'user_id': self.user_id,
            'team1_name': self.team1_name,
            'team2_name': self.team2_name,
            'team1_logo_url': self.team1_logo_url,
            'team2_logo_url': self.team2_logo_url,
            'team1_score': self.team1_score,
            'team2_score': self.team2_score,
            'timer_duration': self.timer_duration,
            'current_time': self.current_time,
            'is_timer_running': self.is_timer_running,
            'current_half': self.current_half,
            'half_time_offset': self.half_time_offset,
            'is_visible': self.is_visible,
            'is_active': self.is_active,
            'design_theme': self.design_theme,
            'display_time': shown,
            'display_clock': format_clock(shown),
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }


class Payment(db.Model):
    __tablename__ = 'payment'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    amount = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(16), default='pending', nullable=False)  # pending, confirmed, rejected
    payment_method = db.Column(db.String(64), nullable=True)
    transaction_id = db.Column(db.String(128), nullable=True)
    reviewed_by = db.Column(db.String(255), nullable=True)  # admin email
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    user = db.relationship('User', back_populates='payments')

    def to_dict(self, include_user=False):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'amount': self.amount,
            'status': self.status,
            'payment_method': self.payment_method,
            'transaction_id': self.transaction_id,
            'reviewed_by': self.reviewed_by,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }
        if include_user and self.user:
            data['user_name'] = self.user.name
            data['user_email'] = self.user.email
        return data


class AdminSession(db.Model):
    __tablename__ = 'admin_session'
    id = db.Column(db.Integer, primary_key=True)
    admin_email = db.Column(db.String(255), nullable=False)
    session_token = db.Column(db.String(64), unique=True, nullable=False, index=True)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)


class TickCheckpoint(db.Model):
    """Last coarse wake of the ticker, keyed by driver name."""
    __tablename__ = 'tick_checkpoint'
    name = db.Column(db.String(32), primary_key=True)
    last_wake_at = db.Column(db.Float, nullable=False)
