import random

import pytest

from config.settings import TaskConfig
from data.models import SessionProfile
from game.clock import TrialClock
from game.state_machine import TrialEngine


class FakeTime:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def clock(fake_time):
    return TrialClock(time_source=fake_time)


@pytest.fixture
def profile():
    return SessionProfile(age=25, sex="male")


@pytest.fixture
def task_config():
    return TaskConfig(
        total_rounds=5,
        go_probability=0.6,
        min_interval_ms=1000,
        max_interval_ms=2000,
        response_window_ms=800,
        lead_in_ms=0,
    )


@pytest.fixture
def make_engine(clock, task_config):
    def _make(**kwargs):
        kwargs.setdefault("config", task_config)
        kwargs.setdefault("rng", random.Random(7))
        kwargs.setdefault("auto_acknowledge_onset", True)
        return TrialEngine(clock=clock, **kwargs)

    return _make
