"""
playback/
---------
Step-timeline layer: precomputed sequences, the playback state machine,
frame schedulers and per-browser sessions.

    from playback import build_sequence, PlaybackController, ManualScheduler
"""

from playback.sequence   import StepSequence, EmptySequenceError, build_sequence, clamp_index, resolve_algorithm_id
from playback.controller import (
    PlaybackController,
    PlaybackState,
    PlaybackSnapshot,
    BASE_INTERVAL_MS,
    SPEED_PRESETS,
    is_valid_speed,
)
from playback.scheduler  import ManualScheduler, AsyncioFrameScheduler
from playback.session    import PlaybackSession, SessionStore

__all__ = [
    "StepSequence",
    "EmptySequenceError",
    "build_sequence",
    "clamp_index",
    "resolve_algorithm_id",
    "PlaybackController",
    "PlaybackState",
    "PlaybackSnapshot",
    "BASE_INTERVAL_MS",
    "SPEED_PRESETS",
    "is_valid_speed",
    "ManualScheduler",
    "AsyncioFrameScheduler",
    "PlaybackSession",
    "SessionStore",
]
