"""Persistence for Match rows.

Writes go through ``mutate_match`` only. It serializes writers of the same
match inside this process with a keyed lock and across processes with a
``SELECT ... FOR UPDATE`` row lock, so a tick and a control command on one
match are applied one after the other and never interleave field by field.
"""

import threading
from typing import Callable, Dict, List

from sqlalchemy.exc import OperationalError

from scoreboard import db
from scoreboard.errors import NotFound, Transient
from scoreboard.models import Match, User, utcnow


_locks: Dict[int, threading.Lock] = {}
_locks_guard = threading.Lock()


def match_lock(match_id: int) -> threading.Lock:
    with _locks_guard:
        lock = _locks.get(match_id)
        if lock is None:
            lock = _locks[match_id] = threading.Lock()
        return lock


def release_match_lock(match_id: int) -> None:
    with _locks_guard:
        _locks.pop(match_id, None)


def _active_query(match_id: int):
    return (
        db.session.query(Match)
        .filter(Match.id == match_id, Match.is_active.is_(True))
        .populate_existing()
    )


def create_match(owner: User, **fields) -> Match:
    match = Match(
        user_id=owner.id,
        team1_score=0,
        team2_score=0,
        current_time=0,
        is_timer_running=False,
        current_half=1,
        half_time_offset=0,
        is_visible=True,
        is_active=True,
        **fields,
    )
    try:
        db.session.add(match)
        db.session.commit()
    except OperationalError as exc:
        db.session.rollback()
        raise Transient() from exc
    return match


def get_match(match_id: int) -> Match:
    try:
        match = _active_query(match_id).first()
    except OperationalError as exc:
        db.session.rollback()
        raise Transient() from exc
    if match is None:
        raise NotFound('Match not found')
    return match


def mutate_match(match_id: int, change: Callable[[Match], None]) -> Match:
    """Apply ``change`` to the locked row and commit.

    ``change`` may raise; the session is then rolled back and the error
    propagates unchanged. ``OperationalError`` becomes ``Transient``.
    """
    with match_lock(match_id):
        try:
            match = _active_query(match_id).with_for_update().first()
            if match is None:
                raise NotFound('Match not found')
            change(match)
            match.updated_at = utcnow()
            db.session.commit()
        except OperationalError as exc:
            db.session.rollback()
            raise Transient() from exc
        except Exception:
            db.session.rollback()
            raise
        return match


def list_running_match_ids() -> List[int]:
    try:
        rows = (
            db.session.query(Match.id)
            .filter(Match.is_timer_running.is_(True), Match.is_active.is_(True))
            .order_by(Match.id)
            .all()
        )
    except OperationalError as exc:
        db.session.rollback()
        raise Transient() from exc
    return [row[0] for row in rows]


def list_matches_for_owner(owner: User) -> List[Match]:
    return (
        Match.query.filter_by(user_id=owner.id, is_active=True)
        .order_by(Match.created_at.desc(), Match.id.desc())
        .populate_existing()
        .all()
    )


def list_all_matches() -> List[Match]:
    return (
        Match.query.filter_by(is_active=True)
        .order_by(Match.created_at.desc(), Match.id.desc())
        .populate_existing()
        .all()
    )


def soft_delete_match(match_id: int) -> Match:
    def _deactivate(match: Match) -> None:
        match.is_active = False
        match.is_timer_running = False

    # Inactive rows are never written again
    match = mutate_match(match_id, _deactivate)
    release_match_lock(match_id)
    return match
