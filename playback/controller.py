"""
controller.py — Step-Timeline Playback Engine
==============================================
The PlaybackController is the ONLY object the UI talks to during a run.
It owns the current index into a StepSequence, the play/pause flag and
the speed multiplier, and exposes a clean play/pause/next/prev/seek/speed
API on top of them.

State machine:
    IDLE     →  play()                     →  PLAYING   (not at last index)
    PLAYING  →  pause()                    →  IDLE
    PLAYING  →  (advance reaches the end)  →  IDLE
    any      →  reset()                    →  IDLE, index 0
    any      →  load_sequence()            →  IDLE, index 0, new sequence
    any      →  next() / prev() / seek()   →  same state, clamped index

Timing:
  While playing, the controller holds exactly one registration with the
  host scheduler and receives `on_tick(timestamp_ms)` once per frame.  It
  advances at most one step per frame, once `BASE_INTERVAL_MS / speed`
  has elapsed since the previous *automatic* advance.  Manual navigation
  does not move that baseline.

Thread safety:
  Every public method runs under one re-entrant lock, ticks included, so
  a command from a request thread and a frame from the scheduler never
  interleave.  Listeners are called with the lock held; they may call
  back into the controller from the same thread.  A frame that finds the
  sequence swapped or the registration replaced part-way through is
  dropped.
"""

import math
import threading
from dataclasses import dataclass
from numbers import Real
from typing import Callable, List, Optional, Dict, Any

import structlog

from algorithms.step import Step
from playback.sequence import StepSequence

log = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Timing constants
# ---------------------------------------------------------------------------
BASE_INTERVAL_MS: float = 2000.0           # dwell time per step at 1.0×

SPEED_PRESETS = (0.25, 0.5, 1.0, 1.5, 2.0)  # offered by the speed selector

IndexListener = Callable[[int, Step], None]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------
@dataclass
class PlaybackState:
    current_index:     int             = 0
    is_playing:        bool            = False
    speed_multiplier:  float           = 1.0
    last_advance_ts:   Optional[float] = None   # internal drift baseline


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Read-only view handed to the UI for drawing control widgets."""

    current_index:     int
    length:            int
    is_playing:        bool
    speed_multiplier:  float
    algorithm_id:      str = ""

    @property
    def at_start(self) -> bool:
        return self.current_index == 0

    @property
    def at_end(self) -> bool:
        return self.current_index == self.length - 1

    @property
    def label(self) -> str:
        return f"Step {self.current_index + 1} of {self.length}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_index":    self.current_index,
            "length":           self.length,
            "is_playing":       self.is_playing,
            "speed_multiplier": self.speed_multiplier,
            "algorithm_id":     self.algorithm_id,
            "at_start":         self.at_start,
            "at_end":           self.at_end,
            "label":            self.label,
        }


def is_valid_speed(multiplier: Any) -> bool:
    """Positive, finite real number (bools excluded)."""
    if isinstance(multiplier, bool) or not isinstance(multiplier, Real):
        return False
    return math.isfinite(multiplier) and multiplier > 0


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        sequence          : The active StepSequence.
        scheduler         : Host scheduler (register/cancel, see scheduler.py).
        base_interval_ms  : Dwell time per step at 1.0× speed.
    """

    def __init__(
        self,
        sequence: StepSequence,
        scheduler,
        on_index_changed: Optional[IndexListener] = None,
        base_interval_ms: float = BASE_INTERVAL_MS,
        speed_multiplier: float = 1.0,
    ):
        if not is_valid_speed(base_interval_ms):
            raise ValueError(f"base_interval_ms must be positive and finite, got {base_interval_ms!r}")
        if not is_valid_speed(speed_multiplier):
            raise ValueError(f"speed_multiplier must be positive and finite, got {speed_multiplier!r}")

        self._sequence:   StepSequence        = sequence
        self._scheduler                       = scheduler
        self._state:      PlaybackState       = PlaybackState(speed_multiplier=float(speed_multiplier))
        self._listeners:  List[IndexListener] = []
        self._handle                          = None   # scheduler registration
        self._generation: int                 = 0      # bumps on every (un)registration
        self._lock                            = threading.RLock()
        self.base_interval_ms: float          = float(base_interval_ms)

        if on_index_changed is not None:
            self._listeners.append(on_index_changed)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def sequence(self) -> StepSequence:
        return self._sequence

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def current_step(self) -> Step:
        with self._lock:
            return self._sequence[self._state.current_index]

    @property
    def length(self) -> int:
        return len(self._sequence)

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def speed_multiplier(self) -> float:
        return self._state.speed_multiplier

    @property
    def step_interval_ms(self) -> float:
        return self.base_interval_ms / self._state.speed_multiplier

    def get_state(self) -> PlaybackSnapshot:
        with self._lock:
            return PlaybackSnapshot(
                current_index=self._state.current_index,
                length=len(self._sequence),
                is_playing=self._state.is_playing,
                speed_multiplier=self._state.speed_multiplier,
                algorithm_id=self._sequence.algorithm_id,
            )

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def subscribe(self, listener: IndexListener) -> Callable[[], None]:
        """Add an (index, step) listener.  Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load_sequence(self, sequence: StepSequence) -> None:
        """
        Swap in a new sequence.  The tick registration for the old one is
        cancelled before anything else changes, so no stale frame can
        advance the new timeline.  Speed is a user preference and carries
        over; everything else starts fresh.
        """
        with self._lock:
            self._stop_ticking()
            self._sequence = sequence
            self._state = PlaybackState(speed_multiplier=self._state.speed_multiplier)
            log.info("playback.sequence_loaded", algorithm_id=sequence.algorithm_id, length=len(sequence))
            self._notify()

    def reset(self) -> bool:
        """Stop playing and go back to step 0."""
        with self._lock:
            was_playing = self._state.is_playing
            self._stop_ticking()
            moved = self._set_index(0)
            return moved or was_playing

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> bool:
        """
        Start auto-advancing.  A no-op when already playing or when the
        last step is showing: there is nothing left to advance to.
        """
        with self._lock:
            if self._state.is_playing:
                return False
            if self._state.current_index >= self._sequence.last_index:
                log.debug("playback.play_ignored_at_end", index=self._state.current_index)
                return False
            self._state.is_playing = True
            self._state.last_advance_ts = None
            self._start_ticking()
            log.info("playback.play", index=self._state.current_index, speed=self._state.speed_multiplier)
            return True

    def pause(self) -> bool:
        with self._lock:
            if not self._state.is_playing:
                return False
            self._stop_ticking()
            log.info("playback.pause", index=self._state.current_index)
            return True

    def toggle(self) -> bool:
        with self._lock:
            if self._state.is_playing:
                return self.pause()
            return self.play()

    # ------------------------------------------------------------------
    # Navigation (always clamped, never raises)
    # ------------------------------------------------------------------
    def next(self) -> bool:
        """Advance one step.  Returns False if already at the end."""
        with self._lock:
            return self._navigate(self._state.current_index + 1)

    def prev(self) -> bool:
        """Rewind one step.  Returns False if already at the start."""
        with self._lock:
            return self._navigate(self._state.current_index - 1)

    def seek(self, index: int) -> bool:
        """Jump to `index`, clamped into the sequence."""
        target = int(index)
        with self._lock:
            return self._navigate(target)

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, multiplier: float) -> bool:
        """
        Change the speed multiplier.  Zero, negative, non-finite and
        non-numeric values are rejected and the previous speed is kept.
        Only future interval computations see the new value.
        """
        with self._lock:
            if not is_valid_speed(multiplier):
                log.warning("playback.speed_rejected", requested=repr(multiplier),
                            kept=self._state.speed_multiplier)
                return False
            self._state.speed_multiplier = float(multiplier)
            log.debug("playback.speed", speed=self._state.speed_multiplier)
            return True

    # ------------------------------------------------------------------
    # Tick  (called by the host scheduler while playing)
    # ------------------------------------------------------------------
    def on_tick(self, timestamp_ms: float) -> bool:
        """
        Process one frame.  Returns True if the index advanced.

        The first frame after play() only records a baseline.  After that
        the controller advances by exactly one step whenever at least one
        step interval has elapsed since the previous automatic advance,
        however long the gap (a backgrounded tab does not skip steps).
        """
        with self._lock:
            state = self._state
            sequence = self._sequence
            generation = self._generation
            if not state.is_playing:
                return False

            if state.last_advance_ts is None:
                state.last_advance_ts = timestamp_ms
                return False

            elapsed = timestamp_ms - state.last_advance_ts
            if not self._is_current(state, sequence, generation):
                log.debug("playback.stale_frame_dropped", algorithm_id=self._sequence.algorithm_id)
                return False
            if elapsed < self.step_interval_ms:
                return False

            state.last_advance_ts = timestamp_ms
            return self._set_index(state.current_index + 1, stop_at_end=True)

    # ------------------------------------------------------------------
    # Internal  (callers hold self._lock)
    # ------------------------------------------------------------------
    def _is_current(self, state: PlaybackState, sequence: StepSequence, generation: int) -> bool:
        return (
            state is self._state
            and sequence is self._sequence
            and generation == self._generation
            and state.is_playing
        )

    def _navigate(self, target: int) -> bool:
        return self._set_index(target, stop_at_end=True)

    def _set_index(self, target: int, stop_at_end: bool = False) -> bool:
        clamped = self._sequence.clamp(target)
        moved = clamped != self._state.current_index
        self._state.current_index = clamped
        # stop before notifying so listeners never see "playing" on the last step
        if stop_at_end and self._state.is_playing and clamped >= self._sequence.last_index:
            self._stop_ticking()
            log.info("playback.auto_stop", index=clamped)
        if moved:
            self._notify()
        return moved

    def _start_ticking(self) -> None:
        self._cancel_registration()
        generation = self._generation

        def tick(timestamp_ms: float) -> None:
            # a frame queued for an older registration must not touch this one
            with self._lock:
                if generation != self._generation:
                    return
                self.on_tick(timestamp_ms)

        self._handle = self._scheduler.register(tick)

    def _stop_ticking(self) -> None:
        self._cancel_registration()
        self._state.is_playing = False
        self._state.last_advance_ts = None

    def _cancel_registration(self) -> None:
        self._generation += 1
        if self._handle is not None:
            handle, self._handle = self._handle, None
            self._scheduler.cancel(handle)

    def _notify(self) -> None:
        index = self._state.current_index
        step = self._sequence[index]
        for listener in list(self._listeners):
            listener(index, step)
