"""Shared fixtures for the habit engine tests.

Every test runs against in-memory stores and a fixed, naive wall clock so
that results never depend on the machine's date or timezone.
"""

from datetime import datetime, timedelta
from itertools import count

import pytest

from habitdesk.models.habit import Habit
from habitdesk.services.habits import HabitRepository, HabitService
from habitdesk.services.notifications import NotificationSettingsProvider
from habitdesk.services.storage import InMemoryStore

# Wednesday
NOW = datetime(2024, 5, 15, 9, 0, 0)


class FakeClock:
    """Callable clock that tests can move forward"""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, value):
        self.now = value
        return self.now


class RecordingNotifier:
    """Notifier double that records every reminder it is asked to send"""

    def __init__(self, result=True, fail_for=()):
        self.calls = []
        self.result = result
        self.fail_for = set(fail_for)

    def send_reminder(self, habit_name):
        self.calls.append(habit_name)
        if habit_name in self.fail_for:
            raise RuntimeError(f"delivery rejected for {habit_name}")
        return self.result


_ids = count(1)


def make_habit(**overrides):
    data = {
        "id": f"habit-{next(_ids)}",
        "name": "Drink water",
        "created_at": NOW - timedelta(days=60),
        "completed_dates": [],
    }
    data.update(overrides)
    return Habit(**data)


def days_ago(n, hour=8):
    """Completion timestamp n days before NOW"""
    return (NOW - timedelta(days=n)).replace(hour=hour, minute=0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def repository(store):
    return HabitRepository(store)


@pytest.fixture
def habit_service(repository, clock):
    return HabitService(repository, clock=clock, week_start="sun")


@pytest.fixture
def settings_provider(store):
    return NotificationSettingsProvider(store)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def habit_factory():
    return make_habit
