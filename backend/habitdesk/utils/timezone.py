"""
Timezone Utilities - Centralized wall-clock handling
"""
from datetime import date, datetime
import pytz

from habitdesk.core.config import settings


def get_local_tz():
    """
    Get the configured application timezone

    Returns:
        pytz timezone for settings.APP_TIMEZONE
    """
    return pytz.timezone(settings.APP_TIMEZONE)


def get_local_now() -> datetime:
    """
    Get current datetime in the application timezone

    Returns:
        Timezone-aware datetime object
    """
    return datetime.now(get_local_tz())


def get_local_today_date() -> date:
    """
    Get today's date in the application timezone

    Returns:
        date object for today
    """
    return get_local_now().date()


def to_local(moment: datetime) -> datetime:
    """
    Bring a stored timestamp into the application's wall-clock frame.

    Aware timestamps are converted; naive ones are taken as already local.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(get_local_tz())
