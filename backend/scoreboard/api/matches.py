from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from scoreboard.api import json_body
from scoreboard.services.matches import control

matches = Blueprint('matches', __name__)

def _ok(match, status=200):
    return jsonify({'success': True, 'data': match.to_dict()}), status


@matches.route('', methods=['POST'])
@login_required
def create_match():
    data = json_body()
    match = control.create_match(
        current_user,
        data.get('team1_name'),
        data.get('team2_name'),
        data.get('timer_duration'),
        data.get('design_theme', 'classic'),
    )
    return _ok(match, 201)


@matches.route('/my', methods=['GET'])
@login_required
def my_matches():
    return jsonify({'success': True, 'data': [m.to_dict() for m in control.list_my_matches(current_user)]})


@matches.route('/<int:match_id>', methods=['GET'])
def get_match(match_id):
    """Public read used by the dashboard and the overlay poller."""
    return _ok(control.get_match(match_id))


@matches.route('/<int:match_id>', methods=['DELETE'])
@login_required
def delete_match(match_id):
    control.delete_match(current_user, match_id)
    return jsonify({'success': True})


@matches.route('/<int:match_id>/score', methods=['PUT'])
@login_required
def set_score(match_id):
    data = json_body()
    return _ok(control.set_score(current_user, match_id, data.get('team1_score'), data.get('team2_score')))


@matches.route('/<int:match_id>/timer', methods=['PUT'])
@login_required
def set_timer(match_id):
    data = json_body()
    return _ok(control.set_timer(current_user, match_id, data.get('current_time'), data.get('is_timer_running')))


@matches.route('/<int:match_id>/timer/start', methods=['POST'])
@login_required
def start_timer(match_id):
    return _ok(control.start_timer(current_user, match_id))


@matches.route('/<int:match_id>/timer/pause', methods=['POST'])
@login_required
def pause_timer(match_id):
    return _ok(control.pause_timer(current_user, match_id))


@matches.route('/<int:match_id>/timer/reset', methods=['POST'])
@login_required
def reset_timer(match_id):
    return _ok(control.reset_timer(current_user, match_id))


@matches.route('/<int:match_id>/timer/adjust', methods=['POST'])
@login_required
def adjust_timer(match_id):
    return _ok(control.adjust_timer(current_user, match_id, json_body().get('delta')))


@matches.route('/<int:match_id>/half', methods=['PUT'])
@login_required
def switch_half(match_id):
    # current_time, half_time_offset and is_timer_running from older clients
    # are ignored; the half switch derives them.
    return _ok(control.switch_half(current_user, match_id, json_body().get('current_half')))


@matches.route('/<int:match_id>/visibility', methods=['PUT'])
@login_required
def set_visibility(match_id):
    return _ok(control.set_visibility(current_user, match_id, json_body().get('is_visible')))


@matches.route('/<int:match_id>/team', methods=['PUT'])
@login_required
def set_team(match_id):
    return _ok(control.set_team(current_user, match_id, json_body()))


@matches.route('/<int:match_id>/settings', methods=['PUT'])
@login_required
def set_settings(match_id):
    return _ok(control.set_settings(current_user, match_id, json_body().get('timer_duration')))
