"""
Notifications module
Message formatting, delivery and settings for habit reminders
"""
from .service import NotificationService, format_habit_reminder
from .settings import NotificationSettingsProvider

__all__ = [
    'NotificationService',
    'format_habit_reminder',
    'NotificationSettingsProvider'
]
