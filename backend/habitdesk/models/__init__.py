"""
Pydantic models for the application
"""
from habitdesk.models.habit import (
    Frequency,
    Period,
    HabitCategory,
    Habit,
    HabitCreate,
    HabitUpdate,
    ToggleResult,
    DayProgress,
    HabitStats,
    HabitListItem,
    DailySummary,
)
from habitdesk.models.notification import NotificationSettings

__all__ = [
    "Frequency",
    "Period",
    "HabitCategory",
    "Habit",
    "HabitCreate",
    "HabitUpdate",
    "ToggleResult",
    "DayProgress",
    "HabitStats",
    "HabitListItem",
    "DailySummary",
    "NotificationSettings",
]
