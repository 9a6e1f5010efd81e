"""
Notification settings provider
"""
import json
import logging

from pydantic import ValidationError

from habitdesk.core.constants import NOTIFICATION_SETTINGS_KEY
from habitdesk.core.exceptions import StorageError
from habitdesk.models.notification import NotificationSettings
from habitdesk.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


class NotificationSettingsProvider:
    """Reads and writes the global notification switches"""

    def __init__(self, store: KeyValueStore, key: str = NOTIFICATION_SETTINGS_KEY):
        self.store = store
        self.key = key

    def get_settings(self) -> NotificationSettings:
        """Current settings; defaults (everything on) if unset or unreadable"""
        try:
            raw = self.store.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read notification settings: {e}")
            return NotificationSettings()

        if not raw:
            return NotificationSettings()

        try:
            return NotificationSettings.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse notification settings: {e}")
            return NotificationSettings()

    def save_settings(self, new_settings: NotificationSettings) -> NotificationSettings:
        """
        Persist settings

        Raises:
            StorageError: If the write fails
        """
        try:
            self.store.set(self.key, new_settings.model_dump_json(by_alias=True))
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to save notification settings: {e}")
            raise StorageError(f"Failed to save notification settings: {e}")
        logger.info(
            f"Notification settings saved (enabled={new_settings.enabled}, "
            f"habit_reminders={new_settings.habit_reminders})"
        )
        return new_settings
