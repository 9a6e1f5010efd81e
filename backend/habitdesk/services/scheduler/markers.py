"""
Reminder-sent markers
Short-lived per (habit, day) flags that stop a reminder from firing twice
"""
from datetime import date
from typing import Optional
import logging

from habitdesk.core.constants import REMINDER_MARKER_PREFIX
from habitdesk.services.storage import InMemoryStore, KeyValueStore

logger = logging.getLogger(__name__)


def marker_key(habit_id: str, day: date) -> str:
    """Storage key for a habit's marker on a calendar day"""
    return f"{REMINDER_MARKER_PREFIX}{habit_id}_{day.isoformat()}"


class MarkerStore:
    """Marker get/set/remove on top of a key-value store"""

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store or InMemoryStore()

    def is_set(self, habit_id: str, day: date) -> bool:
        return self.store.get(marker_key(habit_id, day)) is not None

    def set(self, habit_id: str, day: date) -> None:
        self.store.set(marker_key(habit_id, day), "true")

    def clear(self, habit_id: str, day: date) -> None:
        self.store.remove(marker_key(habit_id, day))
        logger.debug(f"Cleared reminder marker for habit {habit_id} on {day}")
