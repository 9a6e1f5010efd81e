"""Tests for deciding whether a habit is due."""

from datetime import date, timedelta

import pytest

from habitdesk.models.habit import Frequency, Period
from habitdesk.services.habits.recurrence import is_due_on, period_start
from tests.conftest import NOW, days_ago, make_habit

TODAY = NOW.date()


class TestPeriodStart:
    @pytest.mark.parametrize(
        "duration,period,expected",
        [
            (1, Period.DAYS, date(2024, 5, 15)),
            (3, Period.DAYS, date(2024, 5, 13)),
            (2, Period.WEEKS, date(2024, 5, 2)),
            (1, Period.MONTHS, date(2024, 5, 15)),
            (2, Period.MONTHS, date(2024, 4, 15)),
        ],
    )
    def test_window_start(self, duration, period, expected):
        assert period_start(TODAY, duration, period) == expected

    def test_month_window_clamps(self):
        assert period_start(date(2024, 3, 31), 2, Period.MONTHS) == date(2024, 2, 29)


class TestDailyFrequency:
    def test_due_without_completions(self):
        assert is_due_on(make_habit(), NOW)

    def test_not_due_after_completing_today(self):
        habit = make_habit(completed_dates=[days_ago(0)])
        assert not is_due_on(habit, NOW)

    def test_due_again_next_day(self):
        habit = make_habit(completed_dates=[days_ago(0)])
        assert is_due_on(habit, NOW + timedelta(days=1))

    def test_three_day_quota(self):
        """Needs 3 completions in a trailing 3-day window before it stops being due."""
        habit = make_habit(duration=3, period=Period.DAYS, completed_dates=[days_ago(1), days_ago(2)])
        assert is_due_on(habit, NOW)

        habit = make_habit(duration=3, period=Period.DAYS, completed_dates=[days_ago(0), days_ago(1), days_ago(2)])
        assert not is_due_on(habit, NOW)

        # Window slides: the oldest completion drops out tomorrow
        assert is_due_on(habit, NOW + timedelta(days=1))

    def test_completions_after_reference_ignored(self):
        habit = make_habit(completed_dates=[NOW + timedelta(days=2)])
        assert is_due_on(habit, NOW)

    def test_duplicate_same_day_entries_count_once(self):
        habit = make_habit(duration=2, completed_dates=[days_ago(0), days_ago(0, hour=20)])
        assert is_due_on(habit, NOW)


class TestWeeklyFrequency:
    def test_due_when_not_done_this_week(self):
        # Done last Saturday, week started Sunday 12th
        habit = make_habit(frequency=Frequency.WEEKLY, completed_dates=[days_ago(4)])
        assert is_due_on(habit, NOW, week_start="sun")

    def test_not_due_when_done_this_week(self):
        # Done Monday 13th
        habit = make_habit(frequency=Frequency.WEEKLY, completed_dates=[days_ago(2)])
        assert not is_due_on(habit, NOW, week_start="sun")

    def test_week_start_matters(self):
        # Done Sunday 12th: inside a Sunday week, outside a Monday week
        habit = make_habit(frequency=Frequency.WEEKLY, completed_dates=[days_ago(3)], duration=2, period=Period.DAYS)
        assert not is_due_on(habit, NOW, week_start="sun")
        assert is_due_on(habit, NOW, week_start="mon")


class TestCustomFrequency:
    def test_only_due_on_listed_days(self):
        habit = make_habit(frequency=Frequency.CUSTOM, custom_days=["wed"])
        assert is_due_on(habit, NOW)
        for offset in range(1, 7):
            assert not is_due_on(habit, NOW + timedelta(days=offset))

    def test_not_due_on_listed_day_once_quota_met(self):
        habit = make_habit(frequency=Frequency.CUSTOM, custom_days=["wed"], completed_dates=[days_ago(0)])
        assert not is_due_on(habit, NOW)

    def test_empty_custom_days_never_due(self):
        habit = make_habit(frequency=Frequency.CUSTOM, custom_days=[])
        assert not any(is_due_on(habit, NOW + timedelta(days=offset)) for offset in range(7))

    def test_stored_day_names_are_normalised(self):
        habit = make_habit(frequency=Frequency.CUSTOM, custom_days=["Wednesday"])
        assert is_due_on(habit, NOW)


class TestPeriodQuota:
    def test_two_per_two_weeks_met(self):
        habit = make_habit(duration=2, period=Period.WEEKS, completed_dates=[days_ago(3), days_ago(12)])
        assert not is_due_on(habit, NOW)

    def test_two_per_two_weeks_outside_window(self):
        habit = make_habit(duration=2, period=Period.WEEKS, completed_dates=[days_ago(3), days_ago(14)])
        assert is_due_on(habit, NOW)

    def test_single_month_window_is_reference_day(self):
        """Earlier completions this month do not count toward a 1-per-month quota."""
        habit = make_habit(duration=1, period=Period.MONTHS, completed_dates=[days_ago(10)])
        assert is_due_on(habit, NOW)

        habit = make_habit(duration=1, period=Period.MONTHS, completed_dates=[days_ago(0)])
        assert not is_due_on(habit, NOW)

    def test_two_month_quota(self):
        # Apr 20 and May 5, window Apr 15 .. May 15
        habit = make_habit(duration=2, period=Period.MONTHS, completed_dates=[days_ago(25), days_ago(10)])
        assert not is_due_on(habit, NOW)
        # Jun 20: window May 20 .. Jun 20, both completions dropped out
        assert is_due_on(habit, NOW + timedelta(days=36))

