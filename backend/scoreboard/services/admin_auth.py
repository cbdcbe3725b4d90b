import secrets
from datetime import timedelta
from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, request

from scoreboard import db
from scoreboard.models import AdminSession, utcnow

ADMIN_SESSION_COOKIE = 'admin_session_token'


def validate_admin_credentials(email, password) -> bool:
    if not isinstance(email, str) or not isinstance(password, str):
        return False
    cfg = current_app.config
    correct_email = secrets.compare_digest(email, cfg.get('ADMIN_EMAIL') or '')
    correct_pass = secrets.compare_digest(password, cfg.get('ADMIN_PASSWORD') or '')
    return correct_email and correct_pass


def create_admin_session(email: str) -> AdminSession:
    hours = int(current_app.config.get('ADMIN_SESSION_HOURS', 24))
    session = AdminSession(
        admin_email=email,
        session_token=secrets.token_urlsafe(32),
        expires_at=utcnow() + timedelta(hours=hours),
    )
    db.session.add(session)
    db.session.commit()
    return session


def get_admin_session(token: Optional[str]) -> Optional[AdminSession]:
    if not token:
        return None
    return AdminSession.query.filter(
        AdminSession.session_token == token,
        AdminSession.expires_at > utcnow(),
    ).first()


def delete_admin_session(token: str) -> None:
    AdminSession.query.filter_by(session_token=token).delete()
    db.session.commit()


def clean_expired_sessions() -> int:
    removed = AdminSession.query.filter(AdminSession.expires_at <= utcnow()).delete()
    db.session.commit()
    return removed


def admin_required(view):
    """Reject requests without a live admin session cookie."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        token = request.cookies.get(ADMIN_SESSION_COOKIE)
        if not token:
            return jsonify({'success': False, 'message': 'Not authenticated'}), 401
        session = get_admin_session(token)
        if session is None:
            return jsonify({'success': False, 'message': 'Session expired'}), 401
        g.admin_email = session.admin_email
        return view(*args, **kwargs)
    return wrapper
