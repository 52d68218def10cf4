"""
Reminder Scheduler.

One call per host tick. Each tick first re-arms recurring reminders for the
current day, then rings at most one due reminder. The host owns the timer;
the scheduler only ever sees the ``now`` it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from src.config import get_logger
from src.core.entities.reminder import Reminder
from src.core.services.alarm_controller import AlarmController
from src.core.services.reminder_store import ReminderStore
from src.core.time_of_day import format_time, weekday_index

logger = get_logger(__name__)


@dataclass
class TickResult:
    """Outcome of one scheduling pass."""

    triggered: Reminder | None = None
    reset_count: int = 0

    @property
    def state_changed(self) -> bool:
        """Reminder fields were modified and should be persisted."""
        return self.reset_count > 0


class Scheduler:
    """Daily reset pass followed by a first-match-wins trigger pass."""

    def __init__(self, store: ReminderStore, alarm: AlarmController) -> None:
        self._store = store
        self._alarm = alarm

    def tick(self, now: datetime) -> TickResult:
        reset_count = self.reset_daily(now.date())
        triggered = self.trigger_due(now)
        return TickResult(triggered=triggered, reset_count=reset_count)

    def reset_daily(self, today: date) -> int:
        """
        Re-arm recurring reminders scheduled for today.

        A recurring reminder not yet resolved today is made active and loses
        any trigger marker left from an earlier day. One-time reminders are
        never touched.

        Returns:
            Number of reminders that changed.
        """
        weekday = weekday_index(today)
        changed = 0

        for reminder in self._store.list():
            if not reminder.is_recurring or not reminder.rings_on(weekday):
                continue
            if reminder.last_triggered_date == today:
                continue
            if reminder.active and reminder.last_triggered_date is None:
                continue

            reminder.active = True
            reminder.last_triggered_date = None
            changed += 1

        if changed:
            logger.info("daily_reset_applied", date=today.isoformat(), reminders=changed)
        return changed

    def find_due(self, now: datetime) -> Reminder | None:
        """First reminder in store order that should ring at now."""
        current_time = format_time(now)
        today = now.date()
        weekday = weekday_index(today)

        for reminder in self._store.list():
            if reminder.time != current_time:
                continue
            if reminder.is_recurring:
                if reminder.rings_on(weekday) and reminder.last_triggered_date != today:
                    return reminder
            elif reminder.active:
                return reminder
        return None

    def trigger_due(self, now: datetime) -> Reminder | None:
        """
        Ring the first due reminder, unless an alarm is already ringing.

        Later reminders due at the same minute wait for a tick that finds
        the alarm slot free.
        """
        if self._alarm.is_ringing:
            return None

        reminder = self.find_due(now)
        if reminder is None:
            return None

        if not self._alarm.trigger(reminder, now):
            return None
        return reminder
