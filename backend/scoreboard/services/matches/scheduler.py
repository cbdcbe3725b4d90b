import threading
import time
from typing import Callable, Optional

from sqlalchemy.exc import OperationalError

from scoreboard import db, socketio
from scoreboard.errors import NotFound, Transient
from scoreboard.models import Match, TickCheckpoint
from scoreboard.socketio_events import emit_state_update
from . import store
from .timer import advance_one_tick


COARSE_CHECKPOINT = 'coarse'


class TickScheduler:
    """Drives one clock tick per second for every running match.

    Two drivers share ``run_cycle``:

    - continuous: ``start(app)`` spawns a background loop paced to the wall
      clock. A late cycle is followed immediately by the next one, so the
      number of cycles matches the seconds elapsed. A stall longer than
      ``CATCHUP_MAX_SEC`` drops the excess, as coarse wake does.
    - coarse wake: ``catch_up(app)`` is invoked from an external scheduler
      and replays one cycle per second elapsed since the previous wake.

    At most one driver runs per scheduler; ``start`` and ``catch_up`` are
    no-ops while another driver holds it.
    """

    def __init__(self, sleep: Optional[Callable[[float], None]] = None,
                 clock: Optional[Callable[[], float]] = None,
                 spawn: Optional[Callable] = None):
        self._sleep = sleep or time.sleep
        self._clock = clock or time.time
        self._spawn = spawn
        self._guard = threading.Lock()
        self._running = False
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return self._running

    def _acquire(self) -> bool:
        with self._guard:
            if self._running:
                return False
            self._running = True
            self._stop_event.clear()
            return True

    def _release(self) -> None:
        with self._guard:
            self._running = False

    # ---- continuous mode ----

    def start(self, app) -> bool:
        if not self._acquire():
            app.logger.info("[ticker-skip] driver already running")
            return False
        interval = float(app.config.get('TICK_INTERVAL_SEC', 1))
        app.logger.info(f"[ticker-start] interval={interval}s")
        spawn = self._spawn or socketio.start_background_task
        spawn(self._run_forever, app)
        return True

    def stop(self) -> None:
        self._stop_event.set()

    def _run_forever(self, app) -> None:
        interval = float(app.config.get('TICK_INTERVAL_SEC', 1))
        heartbeat = int(app.config.get('TIMER_HEARTBEAT_SEC', 0) or 0)
        backlog_cap = int(app.config.get('CATCHUP_MAX_SEC', 3600))
        next_at = self._clock()
        last_beat = next_at
        cycles = 0
        try:
            while not self._stop_event.is_set():
                next_at += interval
                try:
                    self.run_cycle(app)
                except Exception:
                    app.logger.exception("[tick-error] cycle failed")
                cycles += 1
                now = self._clock()
                if heartbeat > 0 and now - last_beat >= heartbeat:
                    app.logger.info(f"[ticker-heartbeat] cycles={cycles}")
                    last_beat = now
                if now - next_at > backlog_cap:
                    app.logger.warning(
                        f"[ticker-stall] behind={int(now - next_at)}s exceeds cap={backlog_cap}; dropping the excess"
                    )
                    next_at = now
                delay = next_at - now
                if delay > 0:
                    self._sleep(delay)
        finally:
            self._release()
            app.logger.info(f"[ticker-stop] cycles={cycles}")

    # ---- coarse-wake mode ----

    def catch_up(self, app, seconds: Optional[int] = None) -> int:
        """Replay the ticks owed since the last wake, paced one per interval.

        ``seconds`` overrides the checkpoint arithmetic and leaves the
        checkpoint untouched. Returns the number of cycles replayed.
        """
        if not self._acquire():
            app.logger.warning("[catchup-skip] another driver is running")
            return 0
        try:
            if seconds is None:
                with app.app_context():
                    cycles = self._cycles_owed(app)
            else:
                cycles = max(0, int(seconds))
            interval = float(app.config.get('TICK_INTERVAL_SEC', 1))
            app.logger.info(f"[catchup] replaying cycles={cycles} interval={interval}s")
            for i in range(cycles):
                self.run_cycle(app)
                if i < cycles - 1:
                    self._sleep(interval)
            return cycles
        finally:
            self._release()

    def _cycles_owed(self, app) -> int:
        window = int(app.config.get('CATCHUP_WINDOW_SEC', 60))
        cap = int(app.config.get('CATCHUP_MAX_SEC', 3600))
        now = self._clock()
        try:
            checkpoint = db.session.get(TickCheckpoint, COARSE_CHECKPOINT, populate_existing=True)
            if checkpoint is None:
                cycles = window
                db.session.add(TickCheckpoint(name=COARSE_CHECKPOINT, last_wake_at=now))
            else:
                cycles = max(0, int(now - checkpoint.last_wake_at))
                if cycles > cap:
                    app.logger.warning(f"[catchup] owed={cycles} exceeds cap={cap}; dropping the excess")
                    cycles = cap
                    checkpoint.last_wake_at = now
                else:
                    # Keep the fractional remainder for the next wake
                    checkpoint.last_wake_at += cycles
            db.session.commit()
        except OperationalError as exc:
            db.session.rollback()
            raise Transient() from exc
        return cycles

    # ---- shared ----

    def run_cycle(self, app) -> int:
        """Tick every match that was running when the cycle began.

        A match started during the cycle waits for the next one. A match
        paused during the cycle is read under its row lock, so the tick is a
        no-op for it. Returns the number of rows whose clock moved.
        """
        with app.app_context():
            try:
                match_ids = store.list_running_match_ids()
            except Transient as exc:
                app.logger.warning(f"[tick-error] snapshot failed: {exc.message}")
                return 0
            moved = 0
            for match_id in match_ids:
                try:
                    if self._tick(app, match_id):
                        moved += 1
                except NotFound:
                    continue
                except Transient as exc:
                    app.logger.warning(f"[tick-error] match={match_id} {exc.message}; retry next cycle")
            app.logger.debug(f"[tick-cycle] running={len(match_ids)} moved={moved}")
            return moved

    def _tick(self, app, match_id: int) -> bool:
        seen = {}

        def _advance(match: Match) -> None:
            before = match.timer_state()
            after = advance_one_tick(before)
            seen['before'], seen['after'] = before, after
            match.apply_timer_state(after)

        match = store.mutate_match(match_id, _advance)
        if seen['before'] == seen['after']:
            return False
        if not seen['after'].is_timer_running:
            app.logger.info(f"[timer-stop] match={match_id} reached {seen['after'].timer_duration}s")
        emit_state_update(match.to_dict())
        return True
