"""Pytest fixtures for sleep tracker tests."""

import pytest

from sleep_tracker.config import Settings
from sleep_tracker.db import init_db, make_engine
from sleep_tracker.store import SleepStore


class FakeClock:
    """Clock returning whatever millisecond value the test sets."""

    def __init__(self, now: int = 100):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> SleepStore:
    store = SleepStore(engine)
    yield store
    store.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(100)


@pytest.fixture
def memory_settings() -> Settings:
    return Settings(database_url="sqlite://", log_level="WARNING")
