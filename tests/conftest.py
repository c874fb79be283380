# ABOUTME: Shared pytest fixtures for huebeat tests
# ABOUTME: Provides a manually advanced clock and a bus that records published events

import pytest

from huebeat.heartbeat.notifier import NotificationBus


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingBus(NotificationBus):
    """Bus that remembers every published event name."""

    def __init__(self):
        super().__init__()
        self.published: list[str] = []

    def publish(self, name: str) -> None:
        self.published.append(name)
        super().publish(name)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def bus():
    return RecordingBus()
