"""Owner-facing match commands.

Each command validates its input, checks that the caller owns the match and
then applies a clock transition (or a plain field write) through
``store.mutate_match``. Inputs are clamped server-side: scores never go below
zero and ``current_time`` never leaves ``[0, timer_duration]``.
"""

from flask import current_app

from scoreboard.errors import Forbidden, ValidationError
from scoreboard.models import DESIGN_THEMES, Match, User
from scoreboard.socketio_events import emit_state_update
from . import store
from . import timer

TEAM_FIELDS = ('team1_name', 'team2_name', 'team1_logo_url', 'team2_logo_url')
# Largest value an INTEGER column holds
INT_MAX = 2**31 - 1


def _as_int(value, field: str, low=None, high=None) -> int:
    # JSON booleans are ints in Python; reject them explicitly
    if isinstance(value, bool) or value is None:
        raise ValidationError(f'{field} must be an integer')
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f'{field} must be an integer')
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f'{field} must be an integer')
    if (low is not None and number < low) or (high is not None and number > high):
        raise ValidationError(f'{field} is out of range')
    return number


def _as_bool(value, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if value in (0, 1):
        return bool(value)
    raise ValidationError(f'{field} must be a boolean')


def _as_name(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required')
    name = value.strip()
    if len(name) > 64:
        raise ValidationError(f'{field} must be at most 64 characters')
    return name


def _as_duration(value) -> int:
    seconds = _as_int(value, 'timer_duration')
    low = int(current_app.config.get('MIN_TIMER_DURATION_SEC', 60))
    high = int(current_app.config.get('MAX_TIMER_DURATION_SEC', 7200))
    if not low <= seconds <= high:
        raise ValidationError(f'timer_duration must be between {low} and {high} seconds')
    return seconds


def _ensure_owner(owner: User, match: Match) -> None:
    if match.user_id != owner.id:
        raise Forbidden('You do not own this match')


def _command(owner: User, match_id: int, apply) -> Match:
    def change(match: Match) -> None:
        _ensure_owner(owner, match)
        apply(match)

    match = store.mutate_match(match_id, change)
    emit_state_update(match.to_dict())
    return match


def _transition(owner: User, match_id: int, step) -> Match:
    return _command(owner, match_id, lambda m: m.apply_timer_state(step(m.timer_state())))


def create_match(owner: User, team1_name, team2_name, timer_duration, design_theme='classic') -> Match:
    if not owner.is_payment_confirmed:
        raise Forbidden('Payment must be confirmed before creating a scoreboard')
    theme = design_theme or 'classic'
    if theme not in DESIGN_THEMES:
        raise ValidationError(f'design_theme must be one of {", ".join(DESIGN_THEMES)}')
    match = store.create_match(
        owner,
        team1_name=_as_name(team1_name, 'team1_name'),
        team2_name=_as_name(team2_name, 'team2_name'),
        timer_duration=_as_duration(timer_duration),
        design_theme=theme,
    )
    current_app.logger.info(f"[match-create] match={match.id} owner={owner.id} duration={match.timer_duration}s")
    return match


def get_match(match_id: int) -> Match:
    return store.get_match(match_id)


def list_my_matches(owner: User):
    return store.list_matches_for_owner(owner)


def set_score(owner: User, match_id: int, team1_score, team2_score) -> Match:
    t1 = max(0, _as_int(team1_score, 'team1_score', high=INT_MAX))
    t2 = max(0, _as_int(team2_score, 'team2_score', high=INT_MAX))

    def apply(match: Match) -> None:
        match.team1_score = t1
        match.team2_score = t2

    return _command(owner, match_id, apply)


def set_timer(owner: User, match_id: int, current_time, is_timer_running) -> Match:
    seconds = _as_int(current_time, 'current_time')
    running = _as_bool(is_timer_running, 'is_timer_running')
    return _transition(
        owner, match_id,
        lambda state: timer.set_running(timer.clamp_time(state, seconds), running),
    )


def start_timer(owner: User, match_id: int) -> Match:
    return _transition(owner, match_id, lambda state: timer.set_running(state, True))


def pause_timer(owner: User, match_id: int) -> Match:
    return _transition(owner, match_id, lambda state: timer.set_running(state, False))


def reset_timer(owner: User, match_id: int) -> Match:
    return _transition(owner, match_id, timer.reset)


def adjust_timer(owner: User, match_id: int, delta) -> Match:
    seconds = _as_int(delta, 'delta', low=-INT_MAX, high=INT_MAX)
    return _transition(owner, match_id, lambda state: timer.adjust(state, seconds))


def switch_half(owner: User, match_id: int, target_half) -> Match:
    half = _as_int(target_half, 'current_half')
    if half not in timer.HALVES:
        raise ValidationError('current_half must be 1 or 2')
    return _transition(owner, match_id, lambda state: timer.switch_half(state, half))


def set_visibility(owner: User, match_id: int, is_visible) -> Match:
    visible = _as_bool(is_visible, 'is_visible')

    def apply(match: Match) -> None:
        match.is_visible = visible

    return _command(owner, match_id, apply)


def set_team(owner: User, match_id: int, updates: dict) -> Match:
    fields = {k: v for k, v in (updates or {}).items() if k in TEAM_FIELDS}
    if not fields:
        raise ValidationError('No team fields to update')
    clean = {}
    for key, value in fields.items():
        if key.endswith('_name'):
            clean[key] = _as_name(value, key)
        elif value is None or value == '':
            clean[key] = None
        elif isinstance(value, str) and len(value) <= 512:
            clean[key] = value.strip()
        else:
            raise ValidationError(f'{key} must be a URL string')

    def apply(match: Match) -> None:
        for key, value in clean.items():
            setattr(match, key, value)

    return _command(owner, match_id, apply)


def set_settings(owner: User, match_id: int, timer_duration) -> Match:
    seconds = _as_duration(timer_duration)
    return _transition(owner, match_id, lambda state: timer.change_duration(state, seconds))


def delete_match(owner: User, match_id: int) -> Match:
    _ensure_owner(owner, store.get_match(match_id))
    return store.soft_delete_match(match_id)
