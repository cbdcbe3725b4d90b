from flask import Blueprint, current_app, g, jsonify, request
from scoreboard.api import json_body
from scoreboard.models import User
from scoreboard.services import payments as payment_service
from scoreboard.services.admin_auth import (
    ADMIN_SESSION_COOKIE,
    admin_required,
    clean_expired_sessions,
    create_admin_session,
    delete_admin_session,
    validate_admin_credentials,
)
from scoreboard.services.matches import store

admin = Blueprint('admin', __name__)


def _set_session_cookie(response, token, max_age):
    secure = bool(current_app.config.get('ADMIN_COOKIE_SECURE', True))
    response.set_cookie(
        ADMIN_SESSION_COOKIE,
        token,
        max_age=max_age,
        httponly=True,
        path='/',
        secure=secure,
        samesite='None' if secure else 'Lax',
    )


@admin.route('/login', methods=['POST'])
def login():
    data = json_body()
    email = data.get('email')
    if not validate_admin_credentials(email, data.get('password')):
        return jsonify({'success': False, 'message': 'Invalid credentials'}), 401

    clean_expired_sessions()
    session = create_admin_session(email)
    current_app.logger.info(f"[admin-login] email={email}")

    response = jsonify({'success': True, 'message': 'Logged in'})
    hours = int(current_app.config.get('ADMIN_SESSION_HOURS', 24))
    _set_session_cookie(response, session.session_token, hours * 3600)
    return response


@admin.route('/check', methods=['GET'])
@admin_required
def check():
    return jsonify({'success': True, 'authenticated': True})


@admin.route('/logout', methods=['POST'])
def logout():
    token = request.cookies.get(ADMIN_SESSION_COOKIE)
    if token:
        delete_admin_session(token)
    response = jsonify({'success': True})
    _set_session_cookie(response, '', 0)
    return response


@admin.route('/users', methods=['GET'])
@admin_required
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return jsonify({'success': True, 'data': [u.to_dict() for u in users]})


@admin.route('/users/<int:user_id>/toggle', methods=['PUT'])
@admin_required
def toggle_user(user_id):
    data = json_body()
    user = payment_service.set_user_activation(user_id, bool(data.get('activate')))
    state = 'activated' if user.is_payment_confirmed else 'deactivated'
    return jsonify({'success': True, 'message': f'User {state}', 'data': user.to_dict()})


@admin.route('/payments', methods=['GET'])
@admin_required
def list_payments():
    items = payment_service.list_all_payments()
    return jsonify({'success': True, 'data': [p.to_dict(include_user=True) for p in items]})


@admin.route('/payments/<int:payment_id>/confirm', methods=['PUT'])
@admin_required
def confirm_payment(payment_id):
    payment = payment_service.confirm_payment(payment_id, g.admin_email)
    return jsonify({'success': True, 'message': 'Payment confirmed', 'data': payment.to_dict()})


@admin.route('/payments/<int:payment_id>/reject', methods=['PUT'])
@admin_required
def reject_payment(payment_id):
    payment = payment_service.reject_payment(payment_id, g.admin_email)
    return jsonify({'success': True, 'message': 'Payment rejected', 'data': payment.to_dict()})


@admin.route('/matches', methods=['GET'])
@admin_required
def list_matches():
    data = []
    for match in store.list_all_matches():
        item = match.to_dict()
        item['user_name'] = match.owner.name
        item['user_email'] = match.owner.email
        data.append(item)
    return jsonify({'success': True, 'data': data})


@admin.route('/matches/<int:match_id>', methods=['DELETE'])
@admin_required
def delete_match(match_id):
    store.soft_delete_match(match_id)
    current_app.logger.info(f"[match-delete] match={match_id} by={g.admin_email}")
    return jsonify({'success': True, 'message': 'Match deleted'})
