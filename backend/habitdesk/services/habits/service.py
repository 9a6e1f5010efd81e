"""
Habits Service - Business logic for habit management
Handles creating, editing, deleting and toggling habits and the derived numbers
"""
from datetime import datetime
from typing import Callable, List, Optional
import logging
import threading
import uuid

from habitdesk.core.constants import DETAIL_COMPLETION_WINDOW_DAYS, LIST_COMPLETION_WINDOW_DAYS
from habitdesk.core.exceptions import HabitNotFoundError, InvalidHabitDataError, StorageError
from habitdesk.models.habit import (
    DailySummary,
    Habit,
    HabitCategory,
    HabitCreate,
    HabitListItem,
    HabitStats,
    HabitUpdate,
    ToggleResult,
)
from habitdesk.utils.calendar import calendar_day
from habitdesk.utils.timezone import get_local_now
from . import ledger, recurrence, stats
from .repository import HabitRepository

logger = logging.getLogger(__name__)

HABIT_FILTERS = ("all", "today") + tuple(category.value for category in HabitCategory)


class HabitService:
    """
    Owns the in-memory habit list.

    Every read and write goes through one re-entrant lock so that the
    reminder job, which runs on a scheduler thread, never sees a half-applied
    change. Each mutation writes the whole list back to the repository; a
    failed write is logged and the in-memory change is kept.
    """

    def __init__(
        self,
        repository: HabitRepository,
        clock: Callable[[], datetime] = get_local_now,
        week_start: Optional[str] = None
    ):
        self.repository = repository
        self.clock = clock
        self.week_start = week_start
        self._lock = threading.RLock()
        self._habits: List[Habit] = []
        self._deletion_listeners: List[Callable[[str], None]] = []

    # ------------------------------------------------------------------
    # Loading and persistence
    # ------------------------------------------------------------------

    def load(self) -> int:
        """Load habits from storage, returning how many were read"""
        try:
            habits = self.repository.load_habits()
        except StorageError as e:
            logger.error(f"Could not load habits, starting empty: {e}")
            habits = []
        with self._lock:
            self._habits = habits
        logger.info(f"Loaded {len(habits)} habit(s)")
        return len(habits)

    def _persist(self) -> None:
        try:
            self.repository.save_habits(self._habits)
        except StorageError as e:
            logger.error(f"Failed to persist habits: {e}")

    def add_deletion_listener(self, listener: Callable[[str], None]) -> None:
        """Register a callback invoked with the id of every deleted habit"""
        self._deletion_listeners.append(listener)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snapshot(self) -> List[Habit]:
        with self._lock:
            return list(self._habits)

    def has_habit(self, habit_id: str) -> bool:
        with self._lock:
            return any(h.id == habit_id for h in self._habits)

    def get_habit(self, habit_id: str) -> Habit:
        with self._lock:
            for habit in self._habits:
                if habit.id == habit_id:
                    return habit
        raise HabitNotFoundError(f"Habit '{habit_id}' not found")

    def is_due(self, habit: Habit, when: Optional[datetime] = None) -> bool:
        return recurrence.is_due_on(habit, when or self.clock(), self.week_start)

    def list_habits(self, habit_filter: str = "all") -> List[Habit]:
        """
        List habits matching a filter

        Args:
            habit_filter: 'all', 'today' (due today) or a category name

        Raises:
            InvalidHabitDataError: If the filter is unknown
        """
        if habit_filter not in HABIT_FILTERS:
            raise InvalidHabitDataError(
                f"Unknown filter '{habit_filter}'. Use one of: {', '.join(HABIT_FILTERS)}"
            )
        habits = self.snapshot()
        if habit_filter == "all":
            return habits
        if habit_filter == "today":
            now = self.clock()
            return [h for h in habits if self.is_due(h, now)]
        return [h for h in habits if h.category.value == habit_filter]

    def list_items(self, habit_filter: str = "all") -> List[HabitListItem]:
        """Habits with their list badge numbers"""
        now = self.clock()
        return [
            HabitListItem(
                habit=habit,
                current_streak=stats.current_streak(habit, now),
                completion_rate=stats.completion_rate(habit, LIST_COMPLETION_WINDOW_DAYS, now),
                due_today=self.is_due(habit, now),
                completed_today=ledger.is_completed_on(habit, now),
            )
            for habit in self.list_habits(habit_filter)
        ]

    def get_habit_stats(self, habit_id: str, window_days: int = DETAIL_COMPLETION_WINDOW_DAYS) -> HabitStats:
        habit = self.get_habit(habit_id)
        return stats.build_habit_stats(habit, self.clock(), window_days)

    def get_daily_summary(self) -> DailySummary:
        """
        Today's progress across all habits.

        The total counts habits still due today plus those already completed
        today, so finishing a habit does not shrink the denominator.
        """
        now = self.clock()
        habits = self.snapshot()
        completed = [h for h in habits if ledger.is_completed_on(h, now)]
        open_today = [h for h in habits if not ledger.is_completed_on(h, now) and self.is_due(h, now)]
        total = len(completed) + len(open_today)
        percentage = stats.round_half_up(len(completed) / total * 100) if total > 0 else 0
        return DailySummary(
            day=now.date(),
            completed_today=len(completed),
            total_for_today=total,
            completion_percentage=percentage,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_habit(self, data: HabitCreate) -> Habit:
        habit = Habit(
            id=uuid.uuid4().hex,
            created_at=self.clock(),
            completed_dates=[],
            **data.habit_fields()
        )
        with self._lock:
            self._habits = self._habits + [habit]
            self._persist()
        logger.info(f"Created habit '{habit.name}' ({habit.id})")
        return habit

    def update_habit(self, habit_id: str, data: HabitUpdate) -> Habit:
        """Replace a habit's configuration; its ledger is left untouched"""
        with self._lock:
            current = self.get_habit(habit_id)
            updated = current.model_copy(update=data.habit_fields())
            self._habits = [updated if h.id == habit_id else h for h in self._habits]
            self._persist()
        logger.info(f"Updated habit '{updated.name}' ({habit_id})")
        return updated

    def delete_habit(self, habit_id: str) -> Habit:
        with self._lock:
            removed = self.get_habit(habit_id)
            self._habits = [h for h in self._habits if h.id != habit_id]
            self._persist()
        logger.info(f"Deleted habit '{removed.name}' ({habit_id})")

        for listener in self._deletion_listeners:
            try:
                listener(habit_id)
            except Exception as e:
                logger.error(f"Deletion listener failed for habit {habit_id}: {e}")
        return removed

    def toggle_habit(self, habit_id: str, instant: Optional[datetime] = None) -> ToggleResult:
        """
        Toggle completion for the day of ``instant`` (default: now)

        Returns:
            ToggleResult with the updated habit and whether the day became completed
        """
        instant = instant or self.clock()
        with self._lock:
            current = self.get_habit(habit_id)
            updated, completed = ledger.toggle(current, instant)
            self._habits = [updated if h.id == habit_id else h for h in self._habits]
            self._persist()
        logger.info(
            f"Habit '{updated.name}' marked {'completed' if completed else 'not completed'} "
            f"for {calendar_day(instant)}"
        )
        return ToggleResult(habit=updated, completed=completed)
