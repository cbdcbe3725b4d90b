"""Match clock state machine.

The clock of one match is the composite of the current half, the running
flag and the seconds elapsed within the half. Every transition below takes a
``TimerState`` and returns the next one; none of them touch persistence, so
the tick path and the control path share the exact same rules.

``current_time`` never leaves ``[0, timer_duration]``. The clock shown to
viewers keeps counting across halves through ``half_time_offset``.
"""

from dataclasses import dataclass, replace

HALVES = (1, 2)


@dataclass(frozen=True)
class TimerState:
    timer_duration: int
    current_time: int = 0
    is_timer_running: bool = False
    current_half: int = 1
    half_time_offset: int = 0


def _clamp(seconds: int, upper: int) -> int:
    return max(0, min(int(seconds), upper))


def advance_one_tick(state: TimerState) -> TimerState:
    """Advance a running clock by one second, stopping it at the cap.

    This is the only transition that stops the clock on its own.
    """
    if not state.is_timer_running:
        return state
    nxt = min(state.current_time + 1, state.timer_duration)
    return replace(
        state,
        current_time=nxt,
        is_timer_running=nxt < state.timer_duration,
    )


def set_running(state: TimerState, running: bool) -> TimerState:
    # Resuming at the cap is allowed; the next tick stops it again.
    return replace(state, is_timer_running=bool(running))


def reset(state: TimerState) -> TimerState:
    return replace(state, current_time=0, is_timer_running=False)


def adjust(state: TimerState, delta_seconds: int) -> TimerState:
    return replace(state, current_time=_clamp(state.current_time + delta_seconds, state.timer_duration))


def clamp_time(state: TimerState, seconds: int) -> TimerState:
    return replace(state, current_time=_clamp(seconds, state.timer_duration))


def switch_half(state: TimerState, target_half: int) -> TimerState:
    """Start ``target_half`` from zero with the clock stopped.

    In the second half the offset equals one half length, so the displayed
    clock picks up where the first half ended.
    """
    if target_half not in HALVES:
        raise ValueError(f"half must be one of {HALVES}, got {target_half!r}")
    return replace(
        state,
        current_half=target_half,
        current_time=0,
        is_timer_running=False,
        half_time_offset=state.timer_duration if target_half == 2 else 0,
    )


def change_duration(state: TimerState, timer_duration: int) -> TimerState:
    timer_duration = int(timer_duration)
    return replace(
        state,
        timer_duration=timer_duration,
        current_time=_clamp(state.current_time, timer_duration),
    )


def display_time(state: TimerState) -> int:
    if state.current_half == 2:
        return state.current_time + state.half_time_offset
    return state.current_time


def format_clock(seconds: int) -> str:
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins:02d}:{secs:02d}"
