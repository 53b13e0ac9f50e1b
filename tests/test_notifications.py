"""Tests for best-effort reminder scheduling and display formatting."""
import logging
from datetime import datetime
from quizzle.services.formatting import (
    format_countdown,
    format_duration,
    puzzle_performance_message,
    quiz_performance_message,
)
from quizzle.services.notifications import ReminderNotifier, log_delivery
from quizzle.constants import DAILY_REMINDER_ID


class TestReminderNotifier:
    def test_schedules_at_seven_pm(self):
        notifier = ReminderNotifier()
        reminder = notifier.schedule_daily_reminder()
        assert reminder.title == "Daily Brain Teaser"
        assert reminder.next_fire_time(datetime(2026, 3, 10, 12)) == datetime(2026, 3, 10, 19, 0)
        assert reminder.next_fire_time(datetime(2026, 3, 10, 20)) == datetime(2026, 3, 11, 19, 0)

    def test_disabled_schedules_nothing(self):
        notifier = ReminderNotifier(enabled=False)
        assert notifier.schedule_daily_reminder() is None
        assert notifier.pending == {}

    def test_disabling_removes_pending(self):
        notifier = ReminderNotifier()
        notifier.schedule_daily_reminder()
        notifier.set_enabled(False)
        assert notifier.pending == {}

        notifier.set_enabled(True)
        assert DAILY_REMINDER_ID in notifier.pending

    def test_delivery_failure_is_swallowed(self):
        def broken(reminder):
            raise RuntimeError("permission denied")

        notifier = ReminderNotifier(deliver=broken)
        assert notifier.schedule_daily_reminder() is None
        assert notifier.pending == {}

    def test_delivery_hook_receives_reminder(self):
        delivered = []
        notifier = ReminderNotifier(deliver=delivered.append)
        notifier.schedule_daily_reminder()
        assert [r.identifier for r in delivered] == [DAILY_REMINDER_ID]

    def test_log_delivery_hook(self, caplog):
        """Without a push channel the reminder is written to the log."""
        notifier = ReminderNotifier(deliver=log_delivery)
        with caplog.at_level(logging.INFO, logger="quizzle.services.notifications"):
            notifier.schedule_daily_reminder()
        assert any("Daily Brain Teaser" in r.getMessage() for r in caplog.records)
        assert DAILY_REMINDER_ID in notifier.pending


class TestFormatting:
    def test_countdown(self):
        assert format_countdown(0) == "00:00"
        assert format_countdown(59.4) == "00:59"
        assert format_countdown(300) == "05:00"

    def test_duration(self):
        assert format_duration(0) == "0:00"
        assert format_duration(125) == "2:05"

    def test_quiz_message_bands(self):
        assert quiz_performance_message(95) == "Outstanding! 🌟"
        assert quiz_performance_message(80) == "Excellent work! 🎉"
        assert quiz_performance_message(70) == "Good job! 👏"
        assert quiz_performance_message(60) == "Not bad! Keep learning! 📚"
        assert quiz_performance_message(10) == "Keep practicing! You'll improve! 💪"

    def test_puzzle_message(self):
        assert puzzle_performance_message(None, 0) == ""
        assert puzzle_performance_message(False, 0) == "Don't give up! Try again! 🔄"
        assert puzzle_performance_message(True, 2) == "Good work! 👏"
