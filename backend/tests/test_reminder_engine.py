"""Tests for the reminder polling tick."""

from datetime import timedelta
import threading

import pytest

from habitdesk.models.habit import Frequency, HabitCreate
from habitdesk.models.notification import NotificationSettings
from habitdesk.services.scheduler import MarkerStore, ReminderContext, ReminderEngine
from habitdesk.services.scheduler.engine import is_reminder_minute
from habitdesk.services.scheduler.markers import marker_key
from tests.conftest import NOW, RecordingNotifier


@pytest.fixture
def engine(habit_service, settings_provider, notifier, clock):
    return ReminderEngine(
        habit_service=habit_service,
        settings_provider=settings_provider,
        notifier=notifier,
        markers=MarkerStore(),
        clock=clock,
        interval_seconds=30,
        marker_ttl_seconds=120,
    )


def add_reminder_habit(service, name="Stretch", time="09:00", **kwargs):
    return service.create_habit(HabitCreate(name=name, reminder_enabled=True, reminder_time=time, **kwargs))


class TestReminderMinute:
    def test_exact_minute(self):
        assert is_reminder_minute((9, 0), NOW)

    def test_grace_minute(self):
        assert is_reminder_minute((9, 0), NOW + timedelta(minutes=1, seconds=30))

    def test_outside_window(self):
        assert not is_reminder_minute((9, 0), NOW + timedelta(minutes=2))
        assert not is_reminder_minute((9, 0), NOW - timedelta(minutes=1))

    def test_grace_crosses_hour(self):
        assert is_reminder_minute((9, 59), NOW.replace(hour=10, minute=0))


class TestTick:
    def test_sends_once_then_deduplicates(self, engine, habit_service, notifier, clock):
        add_reminder_habit(habit_service)

        assert engine.tick() == 1
        assert notifier.calls == ["Stretch"]

        clock.advance(minutes=1)
        assert engine.tick() == 0
        assert notifier.calls == ["Stretch"]

    def test_debounce_skips_early_tick(self, engine, habit_service, notifier, clock):
        engine.tick()
        add_reminder_habit(habit_service)

        clock.advance(seconds=10)
        assert engine.tick() == 0
        assert notifier.calls == []
        assert engine.context.last_tick == NOW

    def test_disabled_settings_record_tick_without_sending(self, engine, habit_service, settings_provider, notifier):
        add_reminder_habit(habit_service)
        settings_provider.save_settings(NotificationSettings(habit_reminders=False))

        assert engine.tick() == 0
        assert notifier.calls == []
        assert engine.context.last_tick == NOW

    def test_global_switch_off(self, engine, habit_service, settings_provider, notifier):
        add_reminder_habit(habit_service)
        settings_provider.save_settings(NotificationSettings(enabled=False))

        engine.tick()
        assert notifier.calls == []

    def test_not_due_habit_is_not_reminded(self, engine, habit_service, notifier):
        habit = add_reminder_habit(habit_service)
        habit_service.toggle_habit(habit.id)

        engine.tick()
        assert notifier.calls == []

    def test_custom_habit_off_day(self, engine, habit_service, notifier):
        add_reminder_habit(habit_service, frequency=Frequency.CUSTOM, custom_days=["mon"])

        engine.tick()
        assert notifier.calls == []

    def test_wrong_minute(self, engine, habit_service, notifier):
        add_reminder_habit(habit_service, time="10:30")

        engine.tick()
        assert notifier.calls == []

    def test_failing_habit_does_not_block_others(self, habit_service, settings_provider, clock):
        notifier = RecordingNotifier(fail_for={"Broken"})
        engine = ReminderEngine(habit_service, settings_provider, notifier, clock=clock)
        add_reminder_habit(habit_service, name="Broken")
        add_reminder_habit(habit_service, name="Working")

        assert engine.tick() == 1
        assert notifier.calls == ["Broken", "Working"]

    def test_malformed_reminder_time_is_skipped(self, engine, habit_service, notifier, repository, store):
        good = add_reminder_habit(habit_service, name="Good")
        bad = good.model_copy(update={"id": "bad", "name": "Bad", "reminder_time": "nine"})
        repository.save_habits([bad, good])
        habit_service.load()

        assert engine.tick() == 1
        assert notifier.calls == ["Good"]

    def test_delivery_failure_still_marks(self, habit_service, settings_provider, clock):
        notifier = RecordingNotifier(result=False)
        engine = ReminderEngine(habit_service, settings_provider, notifier, clock=clock)
        add_reminder_habit(habit_service)

        assert engine.tick() == 0
        clock.advance(seconds=30)
        engine.tick()
        assert notifier.calls == ["Stretch"]

    def test_marker_expires_after_ttl(self, engine, habit_service, clock):
        habit = add_reminder_habit(habit_service)
        engine.tick()
        assert engine.markers.is_set(habit.id, NOW.date())

        clock.advance(minutes=2)
        engine.tick()
        assert not engine.markers.is_set(habit.id, NOW.date())
        assert engine.context.marker_expiry == {}

    def test_reminds_again_next_day(self, engine, habit_service, notifier, clock):
        add_reminder_habit(habit_service)
        engine.tick()
        clock.advance(days=1)
        engine.tick()
        assert notifier.calls == ["Stretch", "Stretch"]

    def test_marker_clear_scheduler_called(self, engine, habit_service):
        scheduled = []
        engine.marker_clear_scheduler = lambda habit_id, day, run_at: scheduled.append((habit_id, day, run_at))
        habit = add_reminder_habit(habit_service)

        engine.tick()
        assert scheduled == [(habit.id, NOW.date(), NOW + timedelta(minutes=2))]

    def test_separate_contexts_are_independent(self, engine, habit_service, notifier):
        add_reminder_habit(habit_service)
        first, second = ReminderContext(), ReminderContext()

        engine.tick(context=first)
        engine.tick(context=second)

        assert first.last_tick == second.last_tick == NOW
        # Marker store is shared, so the second context does not resend
        assert notifier.calls == ["Stretch"]


class TestDeletion:
    def test_forget_habit_drops_markers(self, engine, habit_service):
        habit = add_reminder_habit(habit_service)
        engine.tick()

        engine.forget_habit(habit.id)
        assert not engine.markers.is_set(habit.id, NOW.date())
        assert engine.context.marker_expiry == {}

    def test_deleted_habit_not_reminded(self, engine, habit_service, notifier):
        habit = add_reminder_habit(habit_service)
        habit_service.delete_habit(habit.id)

        engine.tick()
        assert notifier.calls == []

    def test_marker_key_format(self):
        assert marker_key("abc", NOW.date()) == "reminder_sent_abc_2024-05-15"


class TestConcurrentMarkerExpiry:
    def test_sweep_while_markers_change_on_another_thread(self, engine):
        """Marker jobs and deletions may touch expiry state while a tick sweeps it."""
        stop = threading.Event()
        errors = []

        def churn():
            n = 0
            while not stop.is_set():
                day = NOW.date() - timedelta(days=n % 50)
                engine.track_marker(f"h{n % 7}", day, NOW + timedelta(minutes=5))
                engine.clear_marker(f"h{(n + 3) % 7}", day)
                engine.forget_habit(f"h{(n + 5) % 7}")
                n += 1

        worker = threading.Thread(target=churn)
        worker.start()
        try:
            for _ in range(2000):
                engine._sweep_expired_markers(engine.context, NOW + timedelta(minutes=10))
        except RuntimeError as e:
            errors.append(e)
        finally:
            stop.set()
            worker.join()

        assert errors == []

    def test_tick_survives_concurrent_marker_changes(self, engine, habit_service, notifier, clock):
        add_reminder_habit(habit_service)
        stop = threading.Event()

        def churn():
            n = 0
            while not stop.is_set():
                engine.track_marker(f"other-{n % 20}", NOW.date(), NOW)
                engine.forget_habit(f"other-{(n + 10) % 20}")
                n += 1

        worker = threading.Thread(target=churn)
        worker.start()
        try:
            sent = engine.tick()
        finally:
            stop.set()
            worker.join()

        assert sent == 1
        assert notifier.calls == ["Stretch"]
