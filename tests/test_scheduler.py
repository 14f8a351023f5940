"""Frame scheduler tests (manual clock and asyncio loop)."""

import asyncio

import pytest

from playback import AsyncioFrameScheduler, ManualScheduler, PlaybackController
from conftest import make_sequence


# ============================================================
# ManualScheduler
# ============================================================

def test_manual_delivers_to_every_registration():
    sched = ManualScheduler()
    seen = []
    sched.register(lambda ts: seen.append(("a", ts)))
    sched.register(lambda ts: seen.append(("b", ts)))
    assert sched.tick(16.0) == 2
    assert seen == [("a", 16.0), ("b", 16.0)]


def test_manual_cancel_is_idempotent():
    sched = ManualScheduler()
    handle = sched.register(lambda ts: None)
    sched.cancel(handle)
    sched.cancel(handle)
    sched.cancel(None)
    assert sched.active_count == 0
    assert sched.tick(1.0) == 0


def test_manual_skips_callback_cancelled_mid_frame():
    sched = ManualScheduler()
    seen = []
    handles = {}

    def first(ts):
        seen.append("first")
        sched.cancel(handles["second"])

    handles["first"] = sched.register(first)
    handles["second"] = sched.register(lambda ts: seen.append("second"))
    assert sched.tick(0) == 1
    assert seen == ["first"]


# ============================================================
# AsyncioFrameScheduler
# ============================================================

def test_asyncio_rejects_bad_fps():
    with pytest.raises(ValueError):
        AsyncioFrameScheduler(fps=0)


def test_asyncio_scheduler_plays_sequence_to_the_end():
    async def scenario():
        sched = AsyncioFrameScheduler(fps=250)
        seen = []
        ctrl = PlaybackController(
            make_sequence(3), sched,
            on_index_changed=lambda index, step: seen.append(index),
            base_interval_ms=20.0,
        )
        assert ctrl.play()
        for _ in range(200):
            if not ctrl.is_playing:
                break
            await asyncio.sleep(0.01)
        await sched.aclose()
        return ctrl, sched, seen

    ctrl, sched, seen = asyncio.run(scenario())
    assert seen == [1, 2]
    assert ctrl.current_index == 2
    assert not ctrl.is_playing
    assert sched.active_count == 0


def test_asyncio_pause_stops_frames():
    async def scenario():
        sched = AsyncioFrameScheduler(fps=250)
        ctrl = PlaybackController(make_sequence(50), sched, base_interval_ms=10.0)
        ctrl.play()
        await asyncio.sleep(0.05)
        ctrl.pause()
        stopped_at = ctrl.current_index
        await asyncio.sleep(0.05)
        await sched.aclose()
        return stopped_at, ctrl.current_index, sched.active_count

    stopped_at, later, active = asyncio.run(scenario())
    assert stopped_at == later
    assert active == 0
