"""
Habits module - Recurrence, ledger, streaks and habit management
"""
from . import ledger
from . import recurrence
from . import stats
from . import repository
from . import service

from .recurrence import is_due_on
from .ledger import toggle, is_completed_on, completion_days
from .stats import current_streak, longest_streak, completion_rate, build_habit_stats
from .repository import HabitRepository
from .service import HabitService, HABIT_FILTERS

__all__ = [
    # Modules
    'ledger',
    'recurrence',
    'stats',
    'repository',
    'service',

    # Engine functions
    'is_due_on',
    'toggle',
    'is_completed_on',
    'completion_days',
    'current_streak',
    'longest_streak',
    'completion_rate',
    'build_habit_stats',

    # Service layer
    'HabitRepository',
    'HabitService',
    'HABIT_FILTERS',
]
