"""
Pydantic models for habits
"""
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from habitdesk.core.constants import (
    DEFAULT_HABIT_COLOR,
    DEFAULT_HABIT_ICON,
    WEEKDAY_TOKENS,
)
from habitdesk.models.base import CamelModel


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class Period(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class HabitCategory(str, Enum):
    HEALTH = "health"
    FITNESS = "fitness"
    PRODUCTIVITY = "productivity"
    LEARNING = "learning"
    MINDFULNESS = "mindfulness"
    OTHER = "other"


def parse_reminder_time(value: str) -> Optional[tuple]:
    """
    Parse an "HH:MM" reminder time

    Returns:
        (hour, minute) tuple, or None if the value is malformed
    """
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except (AttributeError, ValueError):
        return None
    return parsed.hour, parsed.minute


class Habit(CamelModel):
    """
    A tracked habit together with its completion ledger.

    This is the persisted record. It is deliberately lenient: stored data that
    breaks the configuration rules still loads, and the recurrence engine
    treats it as never due instead of failing.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    icon: str = DEFAULT_HABIT_ICON
    color: str = DEFAULT_HABIT_COLOR
    frequency: Frequency = Frequency.DAILY
    category: HabitCategory = HabitCategory.OTHER
    created_at: datetime
    completed_dates: List[datetime] = Field(default_factory=list)
    reminder_time: Optional[str] = None
    reminder_enabled: bool = False
    custom_days: List[str] = Field(default_factory=list)
    duration: int = 1
    period: Period = Period.DAYS

    @field_validator("custom_days", "completed_dates", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("custom_days")
    @classmethod
    def lowercase_days(cls, v: List[str]) -> List[str]:
        return [day.strip().lower()[:3] for day in v]

    @field_validator("reminder_enabled", mode="before")
    @classmethod
    def none_as_disabled(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("duration", mode="before")
    @classmethod
    def none_as_single(cls, v: Any) -> Any:
        return 1 if v is None else v

    def to_storage(self) -> Dict[str, Any]:
        """Serialize using the persisted field names"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class HabitCreate(CamelModel):
    """Request model for creating a habit"""

    name: str = Field(..., min_length=1, max_length=200, description="Habit name")
    description: Optional[str] = Field(None, max_length=1000)
    icon: str = DEFAULT_HABIT_ICON
    color: str = DEFAULT_HABIT_COLOR
    frequency: Frequency = Frequency.DAILY
    category: HabitCategory = HabitCategory.OTHER
    custom_days: Optional[List[str]] = Field(None, description="Weekday tokens for custom frequency")
    reminder_enabled: bool = False
    reminder_time: Optional[str] = Field(None, description="Reminder time in HH:MM format (24-hour)")
    duration: int = Field(1, ge=1, description="Completions required per period")
    period: Period = Period.DAYS

    @field_validator("reminder_time")
    @classmethod
    def validate_time_format(cls, v: Optional[str]) -> Optional[str]:
        """Validate time format is HH:MM if provided"""
        if v is None:
            return v
        if parse_reminder_time(v) is None:
            raise ValueError(f"Invalid time format '{v}'. Use HH:MM (24-hour format)")
        return v

    @field_validator("custom_days")
    @classmethod
    def validate_custom_days(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        days = []
        for day in v:
            token = day.strip().lower()
            if token not in WEEKDAY_TOKENS:
                raise ValueError(f"Invalid weekday '{day}'. Use one of {', '.join(WEEKDAY_TOKENS)}")
            if token not in days:
                days.append(token)
        return days

    @model_validator(mode="after")
    def check_rule_consistency(self) -> "HabitCreate":
        if self.frequency == Frequency.CUSTOM and not self.custom_days:
            raise ValueError("Custom frequency needs at least one weekday")
        if self.reminder_enabled and not self.reminder_time:
            raise ValueError("Reminder time is required when reminders are enabled")
        return self

    def habit_fields(self) -> Dict[str, Any]:
        """
        Configuration fields to store on a Habit.

        Custom days only apply to custom habits and the reminder time only
        when reminders are on.
        """
        return {
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "color": self.color,
            "frequency": self.frequency,
            "category": self.category,
            "custom_days": list(self.custom_days or []) if self.frequency == Frequency.CUSTOM else [],
            "reminder_enabled": self.reminder_enabled,
            "reminder_time": self.reminder_time if self.reminder_enabled else None,
            "duration": self.duration,
            "period": self.period,
        }


class HabitUpdate(HabitCreate):
    """Request model for editing a habit's configuration (ledger is untouched)"""
    pass


class ToggleResult(CamelModel):
    """Outcome of toggling today's completion"""
    habit: Habit
    completed: bool = Field(..., description="True if the day became completed, False if it was cleared")


class DayProgress(CamelModel):
    day: date
    completed: bool


class HabitStats(CamelModel):
    """Detail view statistics for a single habit"""
    habit_id: str
    current_streak: int
    longest_streak: int
    completion_rate: int
    window_days: int
    completed_in_window: int
    days: List[DayProgress]


class HabitListItem(CamelModel):
    """Habit with the badge numbers shown in the list view"""
    habit: Habit
    current_streak: int
    completion_rate: int
    due_today: bool
    completed_today: bool


class DailySummary(CamelModel):
    day: date
    completed_today: int
    total_for_today: int
    completion_percentage: int
