"""
session.py — Per-Browser Playback Sessions
===========================================
The web UI is stateless HTTP, but playback is not.  Each browser session
gets one PlaybackSession: the selected algorithm, a ManualScheduler fed
by the page's animation-frame loop, and the PlaybackController.

SessionStore keeps them in memory (no persistence) and evicts the least
recently used session once `max_sessions` is reached.

Flask serves requests on several threads, so two requests from the same
browser can arrive together.  Each PlaybackSession carries an RLock; the
HTTP layer holds it for the whole of a command and the response built
from it.  The store has its own lock around lookup and eviction.
"""

import threading
from collections import OrderedDict
from typing import Optional

import structlog

from playback.controller import PlaybackController, BASE_INTERVAL_MS
from playback.scheduler import ManualScheduler
from playback.sequence import build_sequence

log = structlog.get_logger(__name__)


class PlaybackSession:
    """
    Attributes:
        algorithm_id : Currently loaded algorithm (after fallback).
        scheduler    : ManualScheduler; `tick()` is driven by the client.
        controller   : The PlaybackController for this session.
        lock         : Held around every command issued for this session.
    """

    def __init__(
        self,
        algorithm_id: Optional[str] = None,
        base_interval_ms: float = BASE_INTERVAL_MS,
        speed_multiplier: float = 1.0,
    ):
        self.lock = threading.RLock()
        self.scheduler = ManualScheduler()
        sequence = build_sequence(algorithm_id)
        self.controller = PlaybackController(
            sequence,
            self.scheduler,
            base_interval_ms=base_interval_ms,
            speed_multiplier=speed_multiplier,
        )

    @property
    def algorithm_id(self) -> str:
        return self.controller.sequence.algorithm_id

    def select(self, algorithm_id: Optional[str]) -> str:
        """Build the sequence for `algorithm_id` and load it.  Returns the id actually loaded."""
        sequence = build_sequence(algorithm_id)
        with self.lock:
            self.controller.load_sequence(sequence)
            return self.algorithm_id

    def tick(self, timestamp_ms: float) -> int:
        with self.lock:
            return self.scheduler.tick(timestamp_ms)


class SessionStore:
    """In-memory map of session id → PlaybackSession with LRU eviction."""

    def __init__(
        self,
        max_sessions: int = 256,
        default_algorithm: Optional[str] = None,
        base_interval_ms: float = BASE_INTERVAL_MS,
        default_speed: float = 1.0,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self.default_algorithm = default_algorithm
        self.base_interval_ms = base_interval_ms
        self.default_speed = default_speed
        self._sessions: "OrderedDict[str, PlaybackSession]" = OrderedDict()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def get(self, session_id: str) -> PlaybackSession:
        """Return the session, creating it on first access."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            while len(self._sessions) >= self.max_sessions:
                evicted_id, evicted = self._sessions.popitem(last=False)
                with evicted.lock:
                    evicted.controller.pause()
                log.info("session.evicted", session_id=evicted_id)

            session = PlaybackSession(
                self.default_algorithm,
                base_interval_ms=self.base_interval_ms,
                speed_multiplier=self.default_speed,
            )
            self._sessions[session_id] = session
            log.info("session.created", session_id=session_id, algorithm_id=session.algorithm_id)
            return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            with session.lock:
                session.controller.pause()
