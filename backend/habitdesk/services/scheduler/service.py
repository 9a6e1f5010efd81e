"""
Scheduler Service - Background scheduler lifecycle management
Handles starting, stopping, and configuring the APScheduler instance
"""
from datetime import date, datetime
from typing import Dict, Optional, Set
import logging
import threading

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from habitdesk.core.config import settings
from habitdesk.core.constants import MARKER_CLEAR_JOB_PREFIX, REMINDER_JOB_ID
from habitdesk.core.exceptions import SchedulerError
from habitdesk.services.habits.service import HabitService
from habitdesk.services.notifications import NotificationService, NotificationSettingsProvider
from habitdesk.utils.timezone import get_local_tz
from .engine import ReminderEngine
from .jobs import build_notification_service, check_and_send_reminders
from .markers import MarkerStore

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """
    Binds a ReminderEngine to an APScheduler BackgroundScheduler.

    The tick runs as an interval job; each marker expiry is a one-shot date
    job that is cancelled when its habit is deleted or the scheduler stops.
    """

    def __init__(self, engine: ReminderEngine, interval_seconds: Optional[int] = None):
        self.engine = engine
        self.interval_seconds = interval_seconds or int(engine.interval.total_seconds())
        self.scheduler: Optional[BackgroundScheduler] = None
        self._marker_jobs: Dict[str, Set[str]] = {}
        self._jobs_lock = threading.Lock()
        engine.marker_clear_scheduler = self.schedule_marker_clear

    @property
    def running(self) -> bool:
        return self.scheduler is not None

    def start(self) -> None:
        """Start the background scheduler and run a first check immediately"""
        if self.scheduler is not None:
            logger.warning("Scheduler already running")
            return

        try:
            self.scheduler = BackgroundScheduler(timezone=get_local_tz())
            self.scheduler.add_job(
                func=check_and_send_reminders,
                args=[self.engine],
                trigger=IntervalTrigger(seconds=self.interval_seconds),
                id=REMINDER_JOB_ID,
                name='Check habit reminders',
                replace_existing=True,
                next_run_time=datetime.now(get_local_tz()),
                max_instances=1,
                coalesce=True
            )
            self.scheduler.start()
        except Exception as e:
            self.scheduler = None
            raise SchedulerError(f"Failed to start reminder scheduler: {e}")

        logger.info(f"Scheduler started - checking reminders every {self.interval_seconds} seconds")

    def stop(self) -> None:
        """Stop the background scheduler, dropping pending marker jobs"""
        if self.scheduler is not None:
            if self.scheduler.running:
                self.scheduler.shutdown(wait=False)
            self.scheduler = None
            with self._jobs_lock:
                self._marker_jobs.clear()
            logger.info("Scheduler stopped")

    def schedule_marker_clear(self, habit_id: str, day: date, run_at: datetime) -> None:
        """Schedule removal of a reminder marker"""
        if self.scheduler is None:
            # Swept by the next tick instead
            return

        job_id = f"{MARKER_CLEAR_JOB_PREFIX}:{habit_id}:{day.isoformat()}"
        self.scheduler.add_job(
            func=self._clear_marker,
            args=[habit_id, day, job_id],
            trigger=DateTrigger(run_date=run_at),
            id=job_id,
            name=f'Clear reminder marker {habit_id}',
            replace_existing=True
        )
        with self._jobs_lock:
            self._marker_jobs.setdefault(habit_id, set()).add(job_id)

    def _clear_marker(self, habit_id: str, day: date, job_id: str) -> None:
        self.engine.clear_marker(habit_id, day)
        with self._jobs_lock:
            jobs = self._marker_jobs.get(habit_id)
            if jobs is not None:
                jobs.discard(job_id)
                if not jobs:
                    del self._marker_jobs[habit_id]

    def cancel_habit(self, habit_id: str) -> None:
        """Deletion listener: cancel pending marker jobs and drop markers"""
        with self._jobs_lock:
            job_ids = self._marker_jobs.pop(habit_id, set())
        if self.scheduler is not None:
            for job_id in job_ids:
                try:
                    self.scheduler.remove_job(job_id)
                except JobLookupError:
                    pass
        self.engine.forget_habit(habit_id)
        logger.info(f"Cancelled reminders for deleted habit {habit_id}")


# Global scheduler instance
scheduler: Optional[ReminderScheduler] = None


def create_reminder_scheduler(
    habit_service: HabitService,
    settings_provider: NotificationSettingsProvider,
    notifier: Optional[NotificationService] = None,
    markers: Optional[MarkerStore] = None
) -> ReminderScheduler:
    """Wire an engine and scheduler for a habit service"""
    engine = ReminderEngine(
        habit_service=habit_service,
        settings_provider=settings_provider,
        notifier=notifier or build_notification_service(),
        markers=markers,
        interval_seconds=settings.REMINDER_CHECK_INTERVAL_SECONDS,
        marker_ttl_seconds=settings.REMINDER_MARKER_TTL_SECONDS,
    )
    reminder_scheduler = ReminderScheduler(engine)
    habit_service.add_deletion_listener(reminder_scheduler.cancel_habit)
    return reminder_scheduler


def start_scheduler(habit_service: HabitService, settings_provider: NotificationSettingsProvider) -> ReminderScheduler:
    """
    Start the application's reminder scheduler
    Runs checks every N seconds (configured in settings)
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already running")
        return scheduler

    scheduler = create_reminder_scheduler(habit_service, settings_provider)
    scheduler.start()
    return scheduler


def stop_scheduler() -> None:
    """Stop the application's reminder scheduler"""
    global scheduler

    if scheduler is not None:
        scheduler.stop()
        scheduler = None
