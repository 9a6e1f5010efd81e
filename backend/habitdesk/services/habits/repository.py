"""
Habits Repository - Whole-list persistence in the key-value store
"""
import json
import logging
from typing import List

from pydantic import ValidationError

from habitdesk.core.constants import HABITS_STORAGE_KEY
from habitdesk.core.exceptions import StorageError
from habitdesk.models.habit import Habit
from habitdesk.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


class HabitRepository:
    """Reads and writes the full habit list under a single key"""

    def __init__(self, store: KeyValueStore, key: str = HABITS_STORAGE_KEY):
        self.store = store
        self.key = key

    def load_habits(self) -> List[Habit]:
        """
        Load all stored habits

        Returns:
            List of habits; empty if nothing is stored or the payload is corrupt

        Raises:
            StorageError: If the store itself cannot be read
        """
        try:
            raw = self.store.get(self.key)
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Storage error reading habits: {e}")
            raise StorageError(f"Failed to read habits: {e}")

        if not raw:
            return []

        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.error(f"Failed to parse saved habits: {e}")
            return []

        if not isinstance(records, list):
            logger.error("Saved habits payload is not a list, ignoring it")
            return []

        habits = []
        for record in records:
            try:
                habits.append(Habit.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable habit record: {e.error_count()} error(s)")
        return habits

    def save_habits(self, habits: List[Habit]) -> None:
        """
        Replace the stored habit list

        Raises:
            StorageError: If the write fails
        """
        payload = json.dumps([habit.to_storage() for habit in habits], ensure_ascii=False)
        try:
            self.store.set(self.key, payload)
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Storage error writing habits: {e}")
            raise StorageError(f"Failed to write habits: {e}")
