"""
Completion ledger queries and the toggle operation
"""
from datetime import date, datetime
from typing import Iterable, Set, Tuple

from habitdesk.models.habit import Habit
from habitdesk.utils.calendar import DayLike, calendar_day


def completion_days(habit: Habit) -> Set[date]:
    """
    Distinct calendar days that have at least one completion.

    Duplicate same-day entries collapse into one day.
    """
    return {calendar_day(moment) for moment in habit.completed_dates}


def is_completed_on(habit: Habit, day: DayLike) -> bool:
    target = calendar_day(day)
    return any(calendar_day(moment) == target for moment in habit.completed_dates)


def days_between(days: Iterable[date], start: date, end: date) -> Set[date]:
    """Subset of days falling within [start, end]"""
    return {d for d in days if start <= d <= end}


def toggle(habit: Habit, instant: datetime) -> Tuple[Habit, bool]:
    """
    Flip completion for the calendar day of ``instant``.

    If the day already has completions they are all removed; otherwise a single
    entry stamped with ``instant`` is added.

    Args:
        habit: Habit to update
        instant: Moment of the toggle

    Returns:
        (updated habit, True if the day became completed)
    """
    target = calendar_day(instant)
    remaining = [moment for moment in habit.completed_dates if calendar_day(moment) != target]

    if len(remaining) != len(habit.completed_dates):
        return habit.model_copy(update={"completed_dates": remaining}), False

    updated = list(habit.completed_dates) + [instant]
    return habit.model_copy(update={"completed_dates": updated}), True
