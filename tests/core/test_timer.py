"""Timer tests — state machine transitions and elapsed-time accounting.

Tests cover:
    - Initial Stopped state and zero elapsed
    - start/pause/resume/stop transitions and their StateErrors
    - Elapsed grows while running, freezes while paused, excludes all pauses
    - get_elapsed is idempotent
    - reset discards elapsed time
    - Clock moving backwards clamps to zero
"""

from datetime import timedelta

import pytest

from lifetracker.core.domain_types import TimerStatus
from lifetracker.core.errors import StateError
from lifetracker.core.timer import Paused, Running, Stopped, Timer


# --- Initial state ------------------------------------------------------------

def test_new_timer_is_stopped(clock):
    timer = Timer(clock)
    assert timer.is_stopped()
    assert timer.status == TimerStatus.STOPPED
    assert timer.state == Stopped()
    assert timer.get_elapsed() == timedelta(0)


def test_default_clock_is_wall_clock():
    timer = Timer()
    timer.start()
    assert timer.get_elapsed() >= timedelta(0)
    assert timer.stop() >= timedelta(0)


# --- Transitions --------------------------------------------------------------

def test_start_moves_to_running_with_start_time(clock):
    timer = Timer(clock)
    timer.start()
    assert timer.is_running()
    assert timer.state == Running(start_time=clock.now, paused_duration=timedelta(0))


def test_start_twice_raises_state_error(clock):
    timer = Timer(clock)
    timer.start()
    with pytest.raises(StateError):
        timer.start()
    assert timer.is_running()


def test_start_while_paused_raises_state_error(clock):
    timer = Timer(clock)
    timer.start()
    timer.pause()
    with pytest.raises(StateError):
        timer.start()


def test_pause_records_pause_start(clock):
    timer = Timer(clock)
    timer.start()
    started = clock.now
    clock.advance(minutes=5)
    timer.pause()
    assert timer.is_paused()
    assert timer.state == Paused(
        start_time=started, pause_start=clock.now, paused_duration=timedelta(0),
    )


def test_pause_when_stopped_raises(clock):
    with pytest.raises(StateError):
        Timer(clock).pause()


def test_pause_when_paused_raises(clock):
    timer = Timer(clock)
    timer.start()
    timer.pause()
    with pytest.raises(StateError):
        timer.pause()


def test_resume_when_stopped_raises(clock):
    with pytest.raises(StateError):
        Timer(clock).resume()


def test_resume_when_running_raises(clock):
    timer = Timer(clock)
    timer.start()
    with pytest.raises(StateError):
        timer.resume()


def test_resume_accumulates_pause_interval(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(minutes=10)
    timer.pause()
    clock.advance(minutes=3)
    timer.resume()
    assert isinstance(timer.state, Running)
    assert timer.state.paused_duration == timedelta(minutes=3)


def test_stop_when_stopped_raises(clock):
    with pytest.raises(StateError):
        Timer(clock).stop()


# --- Elapsed accounting -------------------------------------------------------

def test_elapsed_grows_while_running(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(seconds=30)
    first = timer.get_elapsed()
    clock.advance(seconds=30)
    second = timer.get_elapsed()
    assert first == timedelta(seconds=30)
    assert second > first


def test_elapsed_freezes_while_paused(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(minutes=20)
    timer.pause()
    clock.advance(hours=2)
    assert timer.get_elapsed() == timedelta(minutes=20)


def test_stop_excludes_every_paused_interval(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(minutes=10)
    timer.pause()
    clock.advance(minutes=5)
    timer.resume()
    clock.advance(minutes=10)
    timer.pause()
    clock.advance(minutes=7)
    timer.resume()
    clock.advance(minutes=1)
    assert timer.stop() == timedelta(minutes=21)
    assert timer.is_stopped()
    assert timer.get_elapsed() == timedelta(0)


def test_stop_while_paused_returns_time_until_pause(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(minutes=45)
    timer.pause()
    clock.advance(hours=1)
    assert timer.stop() == timedelta(minutes=45)


def test_get_elapsed_is_idempotent(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(minutes=2)
    state_before = timer.state
    readings = {timer.get_elapsed() for _ in range(5)}
    assert readings == {timedelta(minutes=2)}
    assert timer.state == state_before


def test_timer_can_restart_after_stop(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(minutes=1)
    timer.stop()
    timer.start()
    clock.advance(minutes=4)
    assert timer.stop() == timedelta(minutes=4)


def test_reset_discards_elapsed(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(minutes=30)
    timer.reset()
    assert timer.is_stopped()
    assert timer.get_elapsed() == timedelta(0)


def test_clock_moving_backwards_clamps_to_zero(clock):
    timer = Timer(clock)
    timer.start()
    clock.advance(minutes=-5)
    assert timer.get_elapsed() == timedelta(0)
