"""
scheduler.py — Frame Schedulers
================================
The playback controller never assumes a particular clock.  It only needs
a host object with two methods:

    handle = scheduler.register(callback)   # callback(timestamp_ms)
    scheduler.cancel(handle)

and the promise that callbacks receive monotonic millisecond timestamps,
at most once per frame, until cancelled.

Two hosts ship here:
  • ManualScheduler       – frames are pushed in by the caller.  Used by
                            tests and by the web API, where the browser's
                            requestAnimationFrame loop posts timestamps.
  • AsyncioFrameScheduler – frames generated from an asyncio event loop
                            at a fixed rate, for headless playback.
"""

import asyncio
from itertools import count
from typing import Callable, Dict, Optional

import structlog

log = structlog.get_logger(__name__)

TickCallback = Callable[[float], None]


# ---------------------------------------------------------------------------
# ManualScheduler
# ---------------------------------------------------------------------------
class ManualScheduler:
    """Delivers frames only when `tick()` is called."""

    def __init__(self):
        self._callbacks: Dict[int, TickCallback] = {}
        self._ids = count(1)

    def register(self, callback: TickCallback) -> int:
        handle = next(self._ids)
        self._callbacks[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._callbacks.pop(handle, None)

    @property
    def active_count(self) -> int:
        return len(self._callbacks)

    def tick(self, timestamp_ms: float) -> int:
        """
        Deliver one frame to every live registration.  A callback cancelled
        earlier in the same frame is skipped.  Returns the number of
        callbacks invoked.
        """
        delivered = 0
        for handle in list(self._callbacks):
            callback = self._callbacks.get(handle)
            if callback is None:
                continue
            callback(timestamp_ms)
            delivered += 1
        return delivered


# ---------------------------------------------------------------------------
# AsyncioFrameScheduler
# ---------------------------------------------------------------------------
class AsyncioFrameScheduler:
    """
    Runs a frame task on the current event loop while at least one
    callback is registered.  Timestamps come from `loop.time()` (a
    monotonic clock) converted to milliseconds.

    Must be used from inside a running loop.
    """

    def __init__(self, fps: float = 60.0):
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.frame_interval: float = 1.0 / fps
        self._callbacks: Dict[int, TickCallback] = {}
        self._ids = count(1)
        self._task: Optional[asyncio.Task] = None

    def register(self, callback: TickCallback) -> int:
        handle = next(self._ids)
        self._callbacks[handle] = callback
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._run())
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._callbacks.pop(handle, None)
        if not self._callbacks and self._task is not None:
            self._task.cancel()
            self._task = None

    @property
    def active_count(self) -> int:
        return len(self._callbacks)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        while self._callbacks:
            now_ms = loop.time() * 1000.0
            for handle in list(self._callbacks):
                callback = self._callbacks.get(handle)
                if callback is not None:
                    callback(now_ms)
            await asyncio.sleep(self.frame_interval)

    async def aclose(self) -> None:
        """Drop every registration and wait for the frame task to finish."""
        self._callbacks.clear()
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                log.debug("scheduler.frame_task_cancelled")
