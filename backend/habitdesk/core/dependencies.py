"""
Dependency injection for shared stores and services
"""
from functools import lru_cache

from habitdesk.core.config import settings
from habitdesk.services.habits import HabitRepository, HabitService
from habitdesk.services.notifications import NotificationSettingsProvider
from habitdesk.services.storage import KeyValueStore, create_store


@lru_cache(maxsize=None)
def get_store() -> KeyValueStore:
    """Get the persistent key-value store"""
    return create_store(settings.STORAGE_PATH)


@lru_cache(maxsize=None)
def get_habit_service() -> HabitService:
    """Get the habit service, loading stored habits on first use"""
    service = HabitService(HabitRepository(get_store()), week_start=settings.WEEK_START)
    service.load()
    return service


@lru_cache(maxsize=None)
def get_settings_provider() -> NotificationSettingsProvider:
    """Get the notification settings provider"""
    return NotificationSettingsProvider(get_store())
