"""Timer — finite-state wall-clock accumulator (Stopped / Running / Paused).

Invariants:
    - State objects carry timestamps only; elapsed is ALWAYS recomputed from them
    - elapsed = (now or pause point − start_time) − cumulative paused time, never < 0
    - get_elapsed() is pure: repeated calls never change state
    - Illegal transitions raise StateError and leave the state untouched

Design Decisions:
    - Frozen dataclasses as a tagged union: each state holds exactly the fields it needs
    - Injectable clock: tests drive time explicitly instead of sleeping
    - No background thread: the presentation layer polls get_elapsed() on its own cadence
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Union

from lifetracker.core.domain_types import TimerStatus
from lifetracker.core.errors import StateError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class Stopped:
    """Initial and terminal state."""


@dataclass(frozen=True)
class Running:
    start_time: datetime
    paused_duration: timedelta = timedelta(0)


@dataclass(frozen=True)
class Paused:
    start_time: datetime
    pause_start: datetime
    paused_duration: timedelta = timedelta(0)


TimerState = Union[Stopped, Running, Paused]


class Timer:
    """Elapsed-time state machine. Pure in-memory, no IO."""

    def __init__(self, clock: Clock | None = None):
        self._clock: Clock = clock or datetime.now
        self._state: TimerState = Stopped()

    # --- Queries ---------------------------------------------------------------

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def status(self) -> TimerStatus:
        if isinstance(self._state, Running):
            return TimerStatus.RUNNING
        if isinstance(self._state, Paused):
            return TimerStatus.PAUSED
        return TimerStatus.STOPPED

    def is_running(self) -> bool:
        return isinstance(self._state, Running)

    def is_paused(self) -> bool:
        return isinstance(self._state, Paused)

    def is_stopped(self) -> bool:
        return isinstance(self._state, Stopped)

    def get_elapsed(self) -> timedelta:
        """Tracked time so far, excluding paused intervals. Zero when stopped."""
        return _elapsed(self._state, self._clock())

    # --- Transitions -----------------------------------------------------------

    def start(self) -> None:
        """Stopped → Running."""
        if not isinstance(self._state, Stopped):
            raise StateError(f"Timer cannot start while {self.status.value}")
        self._state = Running(start_time=self._clock())
        logger.debug("Timer started")

    def pause(self) -> None:
        """Running → Paused."""
        state = self._state
        if not isinstance(state, Running):
            raise StateError(f"Timer cannot pause while {self.status.value}")
        self._state = Paused(
            start_time=state.start_time,
            pause_start=self._clock(),
            paused_duration=state.paused_duration,
        )
        logger.debug("Timer paused")

    def resume(self) -> None:
        """Paused → Running, folding the pause interval into paused_duration."""
        state = self._state
        if not isinstance(state, Paused):
            raise StateError(f"Timer cannot resume while {self.status.value}")
        pause_interval = max(self._clock() - state.pause_start, timedelta(0))
        self._state = Running(
            start_time=state.start_time,
            paused_duration=state.paused_duration + pause_interval,
        )
        logger.debug("Timer resumed")

    def stop(self) -> timedelta:
        """Running|Paused → Stopped. Returns the tracked duration."""
        if isinstance(self._state, Stopped):
            raise StateError("Timer is already stopped")
        duration = _elapsed(self._state, self._clock())
        self._state = Stopped()
        logger.debug(
            "Timer stopped", extra={"duration_seconds": duration.total_seconds()},
        )
        return duration

    def reset(self) -> None:
        """Force Stopped from any state, discarding elapsed time."""
        self._state = Stopped()
        logger.debug("Timer reset")


def _elapsed(state: TimerState, now: datetime) -> timedelta:
    if isinstance(state, Running):
        elapsed = (now - state.start_time) - state.paused_duration
    elif isinstance(state, Paused):
        elapsed = (state.pause_start - state.start_time) - state.paused_duration
    else:
        return timedelta(0)
    if elapsed < timedelta(0):
        logger.warning("Clock moved backwards; clamping elapsed time to zero")
        return timedelta(0)
    return elapsed
