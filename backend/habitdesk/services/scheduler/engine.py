"""
Reminder Engine - One polling tick of the habit reminder loop

All mutable loop state lives in a ReminderContext so that independent
engines (and tests with a fixed clock) never share it.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Optional, Tuple
import logging
import threading

from habitdesk.core.config import settings
from habitdesk.core.constants import REMINDER_GRACE_MINUTES
from habitdesk.models.habit import Habit, parse_reminder_time
from habitdesk.services.habits.service import HabitService
from habitdesk.services.notifications import NotificationService, NotificationSettingsProvider
from habitdesk.utils.calendar import calendar_day
from habitdesk.utils.timezone import get_local_now, to_local
from .markers import MarkerStore

logger = logging.getLogger(__name__)

MarkerClearScheduler = Callable[[str, date, datetime], None]


@dataclass
class ReminderContext:
    """Loop state carried from one tick to the next"""
    last_tick: Optional[datetime] = None
    marker_expiry: Dict[Tuple[str, date], datetime] = field(default_factory=dict)


def is_reminder_minute(reminder: Tuple[int, int], now: datetime) -> bool:
    """
    True when ``now`` falls on the reminder minute or within the grace
    minute(s) right after it. The grace window does not cross midnight.
    """
    hour, minute = reminder
    local_now = to_local(now)
    elapsed = (local_now.hour * 60 + local_now.minute) - (hour * 60 + minute)
    return 0 <= elapsed <= REMINDER_GRACE_MINUTES


class ReminderEngine:
    """
    Evaluates every habit's reminder once per tick

    Ticks closer together than the interval are skipped. A habit gets at
    most one reminder per day.
    """

    def __init__(
        self,
        habit_service: HabitService,
        settings_provider: NotificationSettingsProvider,
        notifier: NotificationService,
        markers: Optional[MarkerStore] = None,
        clock: Callable[[], datetime] = get_local_now,
        interval_seconds: int = settings.REMINDER_CHECK_INTERVAL_SECONDS,
        marker_ttl_seconds: int = settings.REMINDER_MARKER_TTL_SECONDS,
        marker_clear_scheduler: Optional[MarkerClearScheduler] = None
    ):
        self.habit_service = habit_service
        self.settings_provider = settings_provider
        self.notifier = notifier
        self.markers = markers or MarkerStore()
        self.clock = clock
        self.interval = timedelta(seconds=interval_seconds)
        self.marker_ttl = timedelta(seconds=marker_ttl_seconds)
        self.marker_clear_scheduler = marker_clear_scheduler
        self.context = ReminderContext()
        # Guards every marker_expiry access
        self._expiry_lock = threading.Lock()

    def tick(self, now: Optional[datetime] = None, context: Optional[ReminderContext] = None) -> int:
        """
        Run one reminder check

        Args:
            now: Evaluation moment, defaults to the engine clock
            context: Loop state, defaults to the engine's own

        Returns:
            Number of reminders delivered successfully
        """
        ctx = context or self.context
        now = now or self.clock()

        if ctx.last_tick is not None:
            elapsed = now - ctx.last_tick
            if timedelta(0) <= elapsed < self.interval:
                logger.debug(f"[SCHEDULER] Skipping tick, only {elapsed.total_seconds():.1f}s since last run")
                return 0

        sent = 0
        try:
            self._sweep_expired_markers(ctx, now)

            notification_settings = self.settings_provider.get_settings()
            if not notification_settings.enabled or not notification_settings.habit_reminders:
                logger.debug("[SCHEDULER] Habit reminders disabled, nothing to do")
                return 0

            for habit in self.habit_service.snapshot():
                if not habit.reminder_enabled or not habit.reminder_time:
                    continue
                try:
                    if self._process_habit(habit, now, ctx):
                        sent += 1
                except Exception as e:
                    logger.error(f"[SCHEDULER] Error processing reminder for habit {habit.id}: {e}", exc_info=True)
        finally:
            ctx.last_tick = now

        if sent:
            logger.info(f"[SCHEDULER] Sent {sent} habit reminder(s)")
        return sent

    def _process_habit(self, habit: Habit, now: datetime, ctx: ReminderContext) -> bool:
        reminder = parse_reminder_time(habit.reminder_time)
        if reminder is None:
            logger.warning(f"[SCHEDULER] Habit {habit.id} has malformed reminder time '{habit.reminder_time}'")
            return False

        if not is_reminder_minute(reminder, now):
            return False
        if not self.habit_service.is_due(habit, now):
            return False

        day = calendar_day(now)
        if self.markers.is_set(habit.id, day):
            return False

        # Habit may have been deleted after the snapshot was taken
        if not self.habit_service.has_habit(habit.id):
            return False

        logger.info(f"[SCHEDULER] Sending reminder for: {habit.name}")
        delivered = self.notifier.send_reminder(habit.name)
        if not delivered:
            logger.warning(f"[SCHEDULER] Failed to deliver reminder for: {habit.name}")

        # Marker is set even when delivery failed
        self.markers.set(habit.id, day)
        expires_at = now + self.marker_ttl
        self.track_marker(habit.id, day, expires_at, ctx)
        if self.marker_clear_scheduler is not None:
            self.marker_clear_scheduler(habit.id, day, expires_at)
        return delivered

    def track_marker(self, habit_id: str, day: date, expires_at: datetime, context: Optional[ReminderContext] = None) -> None:
        """Record when a marker should expire"""
        ctx = context or self.context
        with self._expiry_lock:
            ctx.marker_expiry[(habit_id, day)] = expires_at

    def _sweep_expired_markers(self, ctx: ReminderContext, now: datetime) -> None:
        with self._expiry_lock:
            expired = [key for key, expires_at in ctx.marker_expiry.items() if expires_at <= now]
        for habit_id, day in expired:
            self.clear_marker(habit_id, day, ctx)

    def clear_marker(self, habit_id: str, day: date, context: Optional[ReminderContext] = None) -> None:
        """Remove a reminder marker (deferred expiry or sweep)"""
        ctx = context or self.context
        with self._expiry_lock:
            ctx.marker_expiry.pop((habit_id, day), None)
        try:
            self.markers.clear(habit_id, day)
        except Exception as e:
            logger.error(f"[SCHEDULER] Failed to clear reminder marker for habit {habit_id}: {e}")

    def forget_habit(self, habit_id: str, context: Optional[ReminderContext] = None) -> None:
        """Drop every marker belonging to a deleted habit"""
        ctx = context or self.context
        with self._expiry_lock:
            keys = [k for k in ctx.marker_expiry if k[0] == habit_id]
        for key_habit_id, day in keys:
            self.clear_marker(key_habit_id, day, ctx)
