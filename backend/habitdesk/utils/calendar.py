"""
Calendar-day arithmetic

Pure helpers over local calendar days. Timestamps are reduced to a ``date``
key before any comparison so that day membership never depends on string
formatting.
"""
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from habitdesk.core.constants import WEEKDAY_TOKENS
from habitdesk.utils.timezone import get_local_today_date, to_local

DayLike = Union[date, datetime]


def calendar_day(value: DayLike) -> date:
    """Normalise a date or timestamp to its local calendar day."""
    if isinstance(value, datetime):
        return to_local(value).date()
    return value


def same_day(a: DayLike, b: DayLike) -> bool:
    return calendar_day(a) == calendar_day(b)


def days_before(value: DayLike, n: int) -> date:
    return calendar_day(value) - timedelta(days=n)


def is_today(value: DayLike, today: Optional[date] = None) -> bool:
    return calendar_day(value) == (today or get_local_today_date())


def weekday_token(value: DayLike) -> str:
    """Return the three-letter lowercase weekday token ('mon'..'sun')."""
    return WEEKDAY_TOKENS[calendar_day(value).weekday()]


def start_of_week(value: DayLike, week_start: str = "sun") -> date:
    """
    Most recent week start on or before the given day.

    Args:
        value: Day to anchor on
        week_start: Weekday token the week begins on

    Returns:
        The calendar day the current week started
    """
    day = calendar_day(value)
    first = WEEKDAY_TOKENS.index(week_start) if week_start in WEEKDAY_TOKENS else WEEKDAY_TOKENS.index("sun")
    offset = (day.weekday() - first) % 7
    return day - timedelta(days=offset)


def shift_months(value: DayLike, months: int) -> date:
    """
    Shift a day by whole calendar months, clamping to the month's last day.

    shift_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
    """
    return calendar_day(value) + relativedelta(months=months)
