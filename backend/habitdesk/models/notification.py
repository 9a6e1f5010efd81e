"""
Pydantic models for notification settings
"""
from habitdesk.models.base import CamelModel


class NotificationSettings(CamelModel):
    """Global notification switches"""
    enabled: bool = True
    habit_reminders: bool = True
    pomodoro_notifications: bool = True
