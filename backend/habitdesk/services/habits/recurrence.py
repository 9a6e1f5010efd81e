"""
Recurrence evaluation
Decides whether a habit is due on a given day
"""
from datetime import date, timedelta
from typing import Optional, Set

from habitdesk.core.config import settings
from habitdesk.models.habit import Frequency, Habit, Period
from habitdesk.utils.calendar import DayLike, calendar_day, shift_months, start_of_week, weekday_token
from .ledger import completion_days, days_between


def period_start(reference: date, duration: int, period: Period) -> date:
    """
    First day of the trailing quota window ending on ``reference``.

    Days and weeks reach back ``duration`` units less one day (3 days ->
    reference minus 2 days, 2 weeks -> 14 days). Months reach back
    ``duration`` less one calendar month, so a 1-month window is the
    reference day alone.
    """
    if period == Period.MONTHS:
        return shift_months(reference, -(duration - 1))
    unit_days = 7 if period == Period.WEEKS else 1
    return reference - timedelta(days=duration * unit_days - 1)


def is_valid_day(habit: Habit, reference: date, days: Set[date], week_start: str) -> bool:
    """Frequency gate"""
    if habit.frequency == Frequency.DAILY:
        return True
    if habit.frequency == Frequency.WEEKLY:
        week_begin = start_of_week(reference, week_start)
        return not days_between(days, week_begin, reference)
    if habit.frequency == Frequency.CUSTOM:
        return weekday_token(reference) in habit.custom_days
    return False


def quota_count(habit: Habit, reference: date, days: Optional[Set[date]] = None) -> int:
    """Number of completed days inside the current quota window"""
    if days is None:
        days = completion_days(habit)
    start = period_start(reference, habit.duration, habit.period)
    return len(days_between(days, start, reference))


def is_due_on(habit: Habit, reference: DayLike, week_start: Optional[str] = None) -> bool:
    """
    Check whether a habit should be completed on a day

    Args:
        habit: Habit to evaluate
        reference: Day (or moment) to evaluate on
        week_start: Weekday token weeks begin on, defaults to settings.WEEK_START

    Returns:
        True if the frequency gate passes and the period quota is not yet met
    """
    day = calendar_day(reference)
    days = completion_days(habit)
    if not is_valid_day(habit, day, days, week_start or settings.WEEK_START):
        return False
    return quota_count(habit, day, days) < habit.duration
