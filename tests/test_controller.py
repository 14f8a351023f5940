"""
PlaybackController tests

Covers:
1. Navigation clamping and notifications
2. Play / pause / reset state transitions
3. Frame-driven auto-advance timing
4. Speed changes and rejected speeds
5. Sequence switching while playing, from one thread or two
"""

import random
import threading

import pytest

from playback import ManualScheduler, PlaybackController, BASE_INTERVAL_MS
from conftest import Recorder, RecordingScheduler, make_sequence


def run_frames(scheduler, *timestamps):
    for ts in timestamps:
        scheduler.tick(ts)


def play_until_stopped(ctrl, scheduler, frame_ms=100, limit_ms=60_000):
    """Feed evenly spaced frames from t=0 until playback stops; returns the last frame time."""
    ctrl.play()
    ts = 0
    while ctrl.is_playing:
        assert ts <= limit_ms
        scheduler.tick(ts)
        ts += frame_ms
    return ts - frame_ms


# ============================================================
# Navigation
# ============================================================

def test_initial_state(controller):
    state = controller.get_state()
    assert state.current_index == 0
    assert state.length == 8
    assert state.is_playing is False
    assert state.speed_multiplier == 1.0
    assert state.at_start and not state.at_end
    assert state.label == "Step 1 of 8"


def test_next_and_prev_move_one_step(controller, recorder):
    assert controller.next() is True
    assert controller.next() is True
    assert controller.prev() is True
    assert controller.current_index == 1
    assert recorder.indices == [1, 2, 1]


def test_prev_at_start_is_silent_noop(controller, recorder):
    assert controller.prev() is False
    assert controller.current_index == 0
    assert recorder.calls == []


def test_next_at_end_is_silent_noop(controller, recorder):
    controller.seek(7)
    recorder.calls.clear()
    assert controller.next() is False
    assert controller.current_index == 7
    assert recorder.calls == []


@pytest.mark.parametrize("target, expected", [(-5, 0), (999, 7), (3, 3), (0, 0), (7, 7)])
def test_seek_clamps(controller, target, expected):
    controller.seek(target)
    assert controller.current_index == expected


def test_seek_to_current_index_does_not_notify(controller, recorder):
    controller.seek(4)
    controller.seek(4)
    assert recorder.indices == [4]


@pytest.mark.parametrize("seed", [0, 1, 7, 2024])
def test_random_navigation_stays_in_bounds(scheduler, recorder, seed):
    rng = random.Random(seed)
    ctrl = PlaybackController(make_sequence(8), scheduler, on_index_changed=recorder)
    edges = [-10**9, -1, 0, 7, 8, 10**9]

    for _ in range(300):
        op = rng.choice(["next", "prev", "seek", "seek_edge"])
        if op == "next":
            ctrl.next()
        elif op == "prev":
            ctrl.prev()
        elif op == "seek":
            ctrl.seek(rng.randint(-10**6, 10**6))
        else:
            ctrl.seek(rng.choice(edges))
        assert 0 <= ctrl.current_index <= ctrl.length - 1
        assert ctrl.current_index == (recorder.indices or [0])[-1]

    previous = 0
    for index in recorder.indices:
        assert index != previous
        previous = index


def test_listener_receives_step_for_index(controller, recorder):
    controller.seek(5)
    index, step = recorder.calls[-1]
    assert index == 5
    assert step.index == 5
    assert step is controller.current_step


def test_unsubscribe_stops_notifications(controller):
    extra = Recorder()
    unsubscribe = controller.subscribe(extra)
    controller.next()
    unsubscribe()
    controller.next()
    assert extra.indices == [1]


# ============================================================
# Play / Pause / Reset
# ============================================================

def test_play_registers_one_frame_callback(controller, scheduler):
    assert controller.play() is True
    assert controller.is_playing
    assert scheduler.active_count == 1
    assert controller.play() is False
    assert scheduler.active_count == 1


def test_pause_cancels_registration(controller, scheduler):
    controller.play()
    assert controller.pause() is True
    assert not controller.is_playing
    assert scheduler.active_count == 0
    assert controller.pause() is False


def test_toggle(controller):
    controller.toggle()
    assert controller.is_playing
    controller.toggle()
    assert not controller.is_playing


def test_play_at_last_index_is_noop(controller, scheduler):
    controller.seek(7)
    assert controller.play() is False
    assert not controller.is_playing
    assert scheduler.active_count == 0


def test_single_step_sequence_never_plays(scheduler, recorder):
    ctrl = PlaybackController(make_sequence(1), scheduler, on_index_changed=recorder)
    assert ctrl.play() is False
    assert ctrl.next() is False
    assert ctrl.prev() is False
    assert recorder.calls == []


def test_reset_while_playing(controller, scheduler, recorder):
    controller.seek(4)
    controller.play()
    assert controller.reset() is True
    assert controller.current_index == 0
    assert not controller.is_playing
    assert scheduler.active_count == 0
    assert recorder.indices == [4, 0]


def test_reset_at_start_when_idle_is_noop(controller, recorder):
    assert controller.reset() is False
    assert recorder.calls == []


# ============================================================
# Auto-advance timing
# ============================================================

def test_plays_through_whole_sequence(controller, scheduler, recorder):
    controller.play()
    run_frames(scheduler, 0, *[2001 * k for k in range(1, 8)])

    assert recorder.indices == [1, 2, 3, 4, 5, 6, 7]
    assert controller.current_index == 7
    assert not controller.is_playing
    assert scheduler.active_count == 0


def test_first_frame_only_sets_baseline(controller, scheduler, recorder):
    controller.play()
    scheduler.tick(50_000)
    assert controller.current_index == 0
    scheduler.tick(51_999)
    assert controller.current_index == 0
    scheduler.tick(52_000)
    assert controller.current_index == 1


def test_advances_at_most_one_step_per_frame(controller, scheduler):
    controller.play()
    run_frames(scheduler, 0, 60_000)
    assert controller.current_index == 1


def test_no_advance_before_interval(controller, scheduler, recorder):
    controller.play()
    run_frames(scheduler, 0, 500, 1000, 1999.9)
    assert recorder.calls == []


def test_listener_sees_stopped_state_on_final_step(scheduler):
    seen = []
    ctrl = PlaybackController(make_sequence(2), scheduler)
    ctrl.subscribe(lambda index, step: seen.append((index, ctrl.is_playing)))
    ctrl.play()
    run_frames(scheduler, 0, 2000)
    assert seen == [(1, False)]


def test_ticks_after_auto_stop_are_ignored(controller, scheduler, recorder):
    controller.seek(6)
    recorder.calls.clear()
    controller.play()
    run_frames(scheduler, 0, 2000)
    callback = scheduler.history[-1]
    callback(10_000)
    assert recorder.indices == [7]


def test_direct_on_tick_when_idle_does_nothing(controller):
    assert controller.on_tick(123_456) is False
    assert controller.current_index == 0


# ============================================================
# Manual navigation during playback
# ============================================================

def test_manual_step_does_not_move_auto_advance_baseline(controller, scheduler, recorder):
    controller.play()
    scheduler.tick(0)
    scheduler.tick(1000)
    controller.next()
    assert controller.is_playing
    scheduler.tick(2000)
    assert recorder.indices == [1, 2]


def test_seek_to_end_while_playing_stops(controller, scheduler):
    controller.play()
    scheduler.tick(0)
    controller.seek(99)
    assert controller.current_index == 7
    assert not controller.is_playing
    assert scheduler.active_count == 0


def test_pause_then_play_starts_fresh_baseline(controller, scheduler):
    controller.play()
    run_frames(scheduler, 0, 1500)
    controller.pause()
    controller.play()
    run_frames(scheduler, 1600, 3000)
    assert controller.current_index == 0
    scheduler.tick(3600)
    assert controller.current_index == 1


# ============================================================
# Speed
# ============================================================

def test_double_speed_halves_interval(controller, scheduler):
    assert controller.set_speed(2.0) is True
    assert controller.step_interval_ms == BASE_INTERVAL_MS / 2
    controller.play()
    run_frames(scheduler, 0, 999)
    assert controller.current_index == 0
    scheduler.tick(1000)
    assert controller.current_index == 1


@pytest.mark.parametrize("speed", [1.0, 2.0])
def test_full_run_visits_every_step_once(scheduler, recorder, speed):
    ctrl = PlaybackController(make_sequence(8), scheduler, on_index_changed=recorder,
                              speed_multiplier=speed)
    play_until_stopped(ctrl, scheduler)
    assert recorder.indices == [1, 2, 3, 4, 5, 6, 7]
    assert ctrl.current_index == 7


def test_double_speed_finishes_in_half_the_time():
    finish = {}
    for speed in (1.0, 2.0):
        sched, rec = RecordingScheduler(), Recorder()
        ctrl = PlaybackController(make_sequence(8), sched, on_index_changed=rec,
                                  speed_multiplier=speed)
        finish[speed] = play_until_stopped(ctrl, sched)
        assert rec.indices == [1, 2, 3, 4, 5, 6, 7]

    assert finish[1.0] == 7 * BASE_INTERVAL_MS
    assert finish[2.0] == finish[1.0] / 2


def test_speed_change_mid_play_applies_to_next_interval(controller, scheduler):
    controller.play()
    run_frames(scheduler, 0, 2000)
    assert controller.current_index == 1
    controller.set_speed(0.5)
    scheduler.tick(5999)
    assert controller.current_index == 1
    scheduler.tick(6000)
    assert controller.current_index == 2


def test_speed_change_does_not_move_index(controller, recorder):
    controller.seek(3)
    controller.set_speed(1.5)
    assert controller.current_index == 3
    assert recorder.indices == [3]


@pytest.mark.parametrize("bad", [0, -1, -0.25, float("nan"), float("inf"), "fast", None, True])
def test_invalid_speed_rejected(controller, bad):
    controller.set_speed(1.5)
    assert controller.set_speed(bad) is False
    assert controller.speed_multiplier == 1.5


@pytest.mark.parametrize("bad", [0, -2.0, float("nan")])
def test_constructor_rejects_invalid_timing(scheduler, bad):
    with pytest.raises(ValueError):
        PlaybackController(make_sequence(3), scheduler, speed_multiplier=bad)
    with pytest.raises(ValueError):
        PlaybackController(make_sequence(3), scheduler, base_interval_ms=bad)


# ============================================================
# Sequence switching
# ============================================================

def test_load_sequence_resets_and_keeps_speed(controller, scheduler, recorder):
    controller.set_speed(2.0)
    controller.seek(5)
    controller.play()
    controller.load_sequence(make_sequence(3, algorithm_id="other"))

    state = controller.get_state()
    assert state.current_index == 0
    assert state.length == 3
    assert state.is_playing is False
    assert state.speed_multiplier == 2.0
    assert state.algorithm_id == "other"
    assert scheduler.active_count == 0
    assert recorder.indices == [5, 0]


def test_stale_frame_callback_cannot_touch_new_sequence(controller, scheduler, recorder):
    controller.play()
    scheduler.tick(0)
    stale = scheduler.history[-1]

    controller.load_sequence(make_sequence(4))
    controller.play()
    stale(0)
    stale(100_000)
    assert controller.current_index == 0

    scheduler.tick(100_000)
    assert controller.current_index == 0
    scheduler.tick(102_000)
    assert controller.current_index == 1


def test_sequence_swapped_mid_frame_is_not_advanced(scheduler, recorder):
    ctrl = PlaybackController(make_sequence(8), scheduler, on_index_changed=recorder)
    replacement = make_sequence(8, algorithm_id="replacement")

    class SwapsOnSubtract(float):
        """Frame timestamp that loads another sequence while elapsed time is computed."""

        def __sub__(self, other):
            ctrl.load_sequence(replacement)
            return float(self) - other

    ctrl.seek(5)
    ctrl.play()
    ctrl.on_tick(0)
    assert ctrl.on_tick(SwapsOnSubtract(5000)) is False

    assert ctrl.sequence is replacement
    assert ctrl.current_index == 0
    assert not ctrl.is_playing
    assert scheduler.active_count == 0
    assert recorder.indices == [5, 0]


def test_concurrent_ticks_and_switches_keep_index_in_bounds():
    sched = ManualScheduler()
    short, long_ = make_sequence(3, "short"), make_sequence(40, "long")
    mismatches = []

    def check(index, step):
        if step.index != index or step is not ctrl.sequence[index]:
            mismatches.append((index, step.index))

    ctrl = PlaybackController(long_, sched, on_index_changed=check, base_interval_ms=1.0)
    errors = []
    stop = threading.Event()

    def ticker():
        ts = 0.0
        try:
            while not stop.is_set():
                ctrl.on_tick(ts)
                sched.tick(ts)
                ts += 1.0
        except Exception as exc:
            errors.append(exc)

    def switcher():
        try:
            for i in range(300):
                ctrl.load_sequence(long_ if i % 2 else short)
                ctrl.seek(35)
                ctrl.play()
        except Exception as exc:
            errors.append(exc)

    tick_thread = threading.Thread(target=ticker)
    switch_thread = threading.Thread(target=switcher)
    tick_thread.start()
    switch_thread.start()
    switch_thread.join()
    stop.set()
    tick_thread.join()

    assert errors == []
    assert mismatches == []
    assert 0 <= ctrl.current_index <= ctrl.length - 1


def test_listener_exception_propagates(scheduler):
    def boom(index, step):
        raise RuntimeError("listener failed")

    ctrl = PlaybackController(make_sequence(3), scheduler, on_index_changed=boom)
    with pytest.raises(RuntimeError):
        ctrl.next()
    assert ctrl.current_index == 1


def test_independent_controllers_do_not_interfere():
    sched = RecordingScheduler()
    a = PlaybackController(make_sequence(5), sched)
    b = PlaybackController(make_sequence(5), sched, speed_multiplier=2.0)
    a.play()
    b.play()
    run_frames(sched, 0, 1000)
    assert (a.current_index, b.current_index) == (0, 1)
    a.pause()
    run_frames(sched, 2000)
    assert (a.current_index, b.current_index) == (0, 2)
