"""Shared fixtures: hand-built sequences, a manual frame clock, a recording listener."""

from typing import List, Tuple

import pytest

from algorithms.step import Step
from config import AppSettings
from playback import ManualScheduler, PlaybackController, StepSequence


def make_sequence(length: int, algorithm_id: str = "test") -> StepSequence:
    steps = [
        Step(index=i, title=f"step {i}", is_final=(i == length - 1))
        for i in range(length)
    ]
    return StepSequence(steps, algorithm_id=algorithm_id)


class Recorder:
    """Listener that remembers every (index, step) notification."""

    def __init__(self):
        self.calls: List[Tuple[int, Step]] = []

    def __call__(self, index: int, step: Step) -> None:
        self.calls.append((index, step))

    @property
    def indices(self) -> List[int]:
        return [i for i, _ in self.calls]


class RecordingScheduler(ManualScheduler):
    """ManualScheduler that also keeps every callback ever registered."""

    def __init__(self):
        super().__init__()
        self.history = []

    def register(self, callback):
        self.history.append(callback)
        return super().register(callback)


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def sequence_factory():
    return make_sequence


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def controller(scheduler, recorder):
    """Controller over an 8-step sequence at the default 2000 ms interval."""
    return PlaybackController(make_sequence(8), scheduler, on_index_changed=recorder)


@pytest.fixture
def app_settings():
    return AppSettings(
        secret_key="test-secret",
        max_sessions=8,
        base_interval_ms=100.0,
        log_level="WARNING",
    )


@pytest.fixture
def app(app_settings):
    from main import create_app

    flask_app = create_app(app_settings)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
