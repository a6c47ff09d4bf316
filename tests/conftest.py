"""Pytest fixtures for the Task Tracker tests."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from task_tracker.config import Settings
from task_tracker.main import create_app
from task_tracker.store import TaskStore


class FakeClock:
    """Clock that moves forward one second on every reading."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> TaskStore:
    """A fresh, empty store with a deterministic clock."""
    return TaskStore(clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(cors_origins=["http://localhost:3000"], log_level="WARNING")


@pytest.fixture
def client(store: TaskStore, settings: Settings) -> TestClient:
    """Create a test client for the API."""
    return TestClient(create_app(store=store, settings=settings))
