from flask import Blueprint, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from scoreboard import db
from scoreboard.api import json_body
from scoreboard.models import User

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'KS TV scoreboard server'})

@main.route('/register', methods=['POST'])
def register():
    data = json_body()
    email = (data.get('email') or '').strip().lower()
    name = (data.get('name') or '').strip()
    password = data.get('password') or ''
    if not email or '@' not in email:
        return jsonify({'success': False, 'message': 'A valid email is required'}), 400
    if len(name) < 2:
        return jsonify({'success': False, 'message': 'Name must be at least 2 characters'}), 400
    if len(password) < 6:
        return jsonify({'success': False, 'message': 'Password must be at least 6 characters'}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({'success': False, 'message': 'Email already registered'}), 400

    user = User(email=email, name=name)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    login_user(user, remember=True)
    return jsonify({'success': True, 'data': user.to_dict()}), 201

@main.route('/login', methods=['POST'])
def login():
    data = json_body()
    user = User.query.filter_by(email=(data.get('email') or '').strip().lower()).first()
    if user and user.check_password(data.get('password') or ''):
        login_user(user, remember=True)
        return jsonify({'success': True, 'data': user.to_dict()})
    return jsonify({'success': False, 'message': 'Invalid email or password'}), 401

@main.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})

@main.route('/users/me')
@login_required
def me():
    return jsonify({'success': True, 'data': current_user.to_dict()})
