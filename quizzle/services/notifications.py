"""Best-effort daily reminder scheduling.

Reminders are fire-and-forget: a failure here is logged and never reaches the
session or progress logic.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional
from pydantic import BaseModel
from quizzle.constants import DAILY_REMINDER_HOUR, DAILY_REMINDER_MINUTE, DAILY_REMINDER_ID

logger = logging.getLogger(__name__)


class Reminder(BaseModel):
    """A repeating reminder at a fixed local time of day."""
    identifier: str
    title: str
    body: str
    hour: int
    minute: int

    def next_fire_time(self, now: datetime) -> datetime:
        """Return the first occurrence at or after ``now``."""
        candidate = now.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        if candidate < now:
            candidate += timedelta(days=1)
        return candidate


def log_delivery(reminder: Reminder) -> None:
    """Delivery hook for hosts without a push channel: the reminder is only logged.

    Platform delivery (OS notifications, mobile push) belongs to the host
    embedding the service, which passes its own ``deliver`` hook.
    """
    logger.info(
        f"Reminder '{reminder.title}' ready, next at {reminder.next_fire_time(datetime.now()):%Y-%m-%d %H:%M}",
        extra={"activity_id": reminder.identifier}
    )


class ReminderNotifier:
    """Keeps the set of pending reminders and hands them to a delivery hook.

    Args:
        enabled: Whether reminders may be scheduled at all
        deliver: Optional hook invoked with each newly scheduled reminder
    """

    def __init__(self, enabled: bool = True, deliver: Optional[Callable[[Reminder], None]] = None):
        self.enabled = enabled
        self._deliver = deliver
        self._pending: Dict[str, Reminder] = {}

    @property
    def pending(self) -> Dict[str, Reminder]:
        return dict(self._pending)

    def schedule_daily_reminder(self) -> Optional[Reminder]:
        """Schedule the 19:00 daily reminder. Returns None when disabled or on failure."""
        if not self.enabled:
            logger.debug("Notifications disabled, daily reminder not scheduled")
            return None

        reminder = Reminder(
            identifier=DAILY_REMINDER_ID,
            title="Daily Brain Teaser",
            body="Ready for today's challenge? Test your knowledge with QuizzleQuest!",
            hour=DAILY_REMINDER_HOUR,
            minute=DAILY_REMINDER_MINUTE,
        )
        try:
            if self._deliver is not None:
                self._deliver(reminder)
        except Exception as e:
            logger.warning(f"Daily reminder could not be scheduled: {e}")
            return None

        self._pending[reminder.identifier] = reminder
        logger.info(f"Daily reminder scheduled for {reminder.hour:02d}:{reminder.minute:02d}")
        return reminder

    def set_enabled(self, enabled: bool) -> None:
        """Toggle reminders. Disabling removes every pending reminder."""
        self.enabled = enabled
        if enabled:
            self.schedule_daily_reminder()
        else:
            self.cancel_all()

    def cancel_all(self) -> None:
        self._pending.clear()
        logger.info("All pending reminders removed")
