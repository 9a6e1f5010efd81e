"""
Streak and completion-rate calculations
"""
import math
from datetime import date, timedelta
from typing import List, Optional

from habitdesk.core.constants import DETAIL_COMPLETION_WINDOW_DAYS
from habitdesk.models.habit import DayProgress, Habit, HabitStats
from habitdesk.utils.calendar import DayLike, calendar_day
from habitdesk.utils.timezone import get_local_today_date
from .ledger import completion_days


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _reference_day(reference: Optional[DayLike]) -> date:
    return calendar_day(reference) if reference is not None else get_local_today_date()


def current_streak(habit: Habit, reference: Optional[DayLike] = None) -> int:
    """
    Consecutive completed days ending today or yesterday.

    A streak whose latest completion is older than yesterday is broken and
    counts as 0. Completions after the reference day are ignored.
    """
    today = _reference_day(reference)
    days = completion_days(habit)

    if today in days:
        cursor = today
    elif today - timedelta(days=1) in days:
        cursor = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(habit: Habit) -> int:
    """Longest run of consecutive completed days anywhere in the ledger"""
    longest = 0
    run = 0
    previous = None
    for day in sorted(completion_days(habit)):
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def day_progress(habit: Habit, window_days: int, reference: Optional[DayLike] = None) -> List[DayProgress]:
    """Completion flag for each day of the trailing window, oldest first"""
    if window_days < 1:
        raise ValueError(f"window_days must be positive, got {window_days}")
    today = _reference_day(reference)
    days = completion_days(habit)
    return [
        DayProgress(day=today - timedelta(days=offset), completed=(today - timedelta(days=offset)) in days)
        for offset in reversed(range(window_days))
    ]


def completion_rate(habit: Habit, window_days: int, reference: Optional[DayLike] = None) -> int:
    """
    Percentage of days completed in a trailing window

    Args:
        habit: Habit to measure
        window_days: Window length in days, ending on (and including) the reference day
        reference: Last day of the window, defaults to today

    Returns:
        round(completed / window_days * 100)
    """
    progress = day_progress(habit, window_days, reference)
    completed = sum(1 for entry in progress if entry.completed)
    return round_half_up(completed / window_days * 100)


def build_habit_stats(
    habit: Habit,
    reference: Optional[DayLike] = None,
    window_days: int = DETAIL_COMPLETION_WINDOW_DAYS
) -> HabitStats:
    """Everything the detail view shows for one habit"""
    today = _reference_day(reference)
    progress = day_progress(habit, window_days, today)
    completed = sum(1 for entry in progress if entry.completed)
    return HabitStats(
        habit_id=habit.id,
        current_streak=current_streak(habit, today),
        longest_streak=longest_streak(habit),
        completion_rate=round_half_up(completed / window_days * 100),
        window_days=window_days,
        completed_in_window=completed,
        days=progress,
    )
