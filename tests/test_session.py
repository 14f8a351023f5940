"""PlaybackSession / SessionStore tests."""

import threading

import pytest

from algorithms import DEFAULT_ALGORITHM
from playback import PlaybackSession, SessionStore


def test_session_starts_on_default_algorithm():
    ps = PlaybackSession()
    assert ps.algorithm_id == DEFAULT_ALGORITHM
    assert ps.controller.current_index == 0


def test_select_returns_loaded_id():
    ps = PlaybackSession()
    assert ps.select("min-heap") == "min-heap"
    assert ps.select("unknown") == DEFAULT_ALGORITHM


def test_session_tick_drives_controller():
    ps = PlaybackSession(base_interval_ms=100.0)
    ps.controller.play()
    ps.tick(0)
    ps.tick(100)
    assert ps.controller.current_index == 1


def test_store_creates_once_per_id():
    store = SessionStore(max_sessions=4)
    a = store.get("a")
    assert store.get("a") is a
    assert "a" in store
    assert len(store) == 1


def test_store_applies_defaults():
    store = SessionStore(default_algorithm="bst", base_interval_ms=500.0, default_speed=2.0)
    ctrl = store.get("x").controller
    assert ctrl.sequence.algorithm_id == "bst"
    assert ctrl.speed_multiplier == 2.0
    assert ctrl.step_interval_ms == 250.0


def test_store_evicts_least_recently_used():
    store = SessionStore(max_sessions=2)
    store.get("a")
    store.get("b")
    store.get("a")
    store.get("c")
    assert "a" in store and "c" in store
    assert "b" not in store
    assert len(store) == 2


def test_eviction_pauses_the_session():
    store = SessionStore(max_sessions=1)
    first = store.get("a")
    first.controller.play()
    store.get("b")
    assert not first.controller.is_playing
    assert first.scheduler.active_count == 0


def test_discard():
    store = SessionStore()
    store.get("a")
    store.discard("a")
    store.discard("missing")
    assert "a" not in store


def test_store_needs_room_for_one_session():
    with pytest.raises(ValueError):
        SessionStore(max_sessions=0)


def test_select_while_playing_starts_new_sequence_at_zero():
    ps = PlaybackSession("insertion-sort", base_interval_ms=100.0)
    ps.controller.seek(5)
    ps.controller.play()
    ps.tick(0)
    ps.select("min-heap")
    ps.tick(5000)
    assert ps.algorithm_id == "min-heap"
    assert ps.controller.current_index == 0
    assert not ps.controller.is_playing


def test_concurrent_select_and_tick_on_one_session():
    ps = PlaybackSession(base_interval_ms=1.0)
    keys = ["insertion-sort", "min-heap", "graph-bfs", "bst"]
    errors = []
    stop = threading.Event()

    def ticker():
        ts = 0.0
        try:
            while not stop.is_set():
                with ps.lock:
                    ps.tick(ts)
                    state = ps.controller.get_state()
                    assert 0 <= state.current_index < state.length
                ts += 1.0
        except Exception as exc:
            errors.append(exc)

    def selector():
        try:
            for i in range(200):
                with ps.lock:
                    ps.select(keys[i % len(keys)])
                    ps.controller.seek(10**6)
                    ps.controller.prev()
                    ps.controller.play()
        except Exception as exc:
            errors.append(exc)

    tick_thread = threading.Thread(target=ticker)
    select_thread = threading.Thread(target=selector)
    tick_thread.start()
    select_thread.start()
    select_thread.join()
    stop.set()
    tick_thread.join()

    assert errors == []
    assert ps.algorithm_id == keys[199 % len(keys)]


def test_store_concurrent_get_respects_capacity():
    store = SessionStore(max_sessions=8)
    errors = []

    def worker(offset):
        try:
            for i in range(100):
                store.get(f"s{(offset * 7 + i) % 20}")
                store.discard(f"s{(offset + i) % 20}")
                assert len(store) <= 8
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(store) <= 8
