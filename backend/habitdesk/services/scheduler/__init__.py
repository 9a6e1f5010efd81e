"""
Scheduler module
Background polling for habit reminders
"""
from .service import ReminderScheduler, create_reminder_scheduler, start_scheduler, stop_scheduler
from .engine import ReminderContext, ReminderEngine
from .markers import MarkerStore
from . import jobs

__all__ = [
    'ReminderScheduler',
    'create_reminder_scheduler',
    'start_scheduler',
    'stop_scheduler',
    'ReminderContext',
    'ReminderEngine',
    'MarkerStore',
    'jobs'
]
