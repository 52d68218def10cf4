"""
Alarm Controller.

Owns the single alarm slot and its Idle -> Ringing -> Idle state machine.
Dismiss and snooze are the only ways out of Ringing; both are no-ops when
nothing is ringing, so duplicate user input is harmless.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from src.config import get_logger
from src.core.entities.alarm import AlarmState, AlarmStatus
from src.core.entities.history import HistoryEntry
from src.core.entities.reminder import Reminder
from src.core.interfaces.signal import IAlarmSignal
from src.core.services.history_log import HistoryLog
from src.core.time_of_day import add_minutes

logger = get_logger(__name__)


def alarm_message(reminder: Reminder) -> str:
    return f"Time for your {reminder.name}!"


def announcement(reminder: Reminder) -> str:
    text = alarm_message(reminder)
    if reminder.notes:
        text += f" Notes: {reminder.notes}"
    return text


class AlarmController:
    """
    Single-slot alarm state machine.

    The active alarm is a reference to a reminder owned by the store; resolving
    it mutates that reminder in place and appends to the history log.
    """

    def __init__(
        self,
        history: HistoryLog,
        signal: IAlarmSignal | None = None,
        speech_enabled: bool = True,
    ) -> None:
        self._history = history
        self._signal = signal
        self._speech_enabled = speech_enabled

        self._active: Reminder | None = None
        self._since: datetime | None = None
        self._message: str | None = None

    @property
    def state(self) -> AlarmState:
        return AlarmState.RINGING if self._active is not None else AlarmState.IDLE

    @property
    def is_ringing(self) -> bool:
        return self._active is not None

    @property
    def active_reminder(self) -> Reminder | None:
        return self._active

    def status(self) -> AlarmStatus:
        """Explicit alarm-state query for the presentation layer."""
        if self._active is None:
            return AlarmStatus()
        return AlarmStatus(
            state=AlarmState.RINGING,
            reminder_id=self._active.id,
            reminder_name=self._active.name,
            message=self._message,
            since=self._since,
        )

    def trigger(self, reminder: Reminder, now: datetime) -> bool:
        """
        Start ringing for reminder.

        Returns:
            False if another alarm is already ringing (nothing changes).
        """
        if self._active is not None:
            logger.debug(
                "alarm_trigger_ignored",
                reminder_id=reminder.id,
                ringing_id=self._active.id,
            )
            return False

        self._active = reminder
        self._since = now
        self._message = alarm_message(reminder)
        logger.info(
            "alarm_triggered",
            reminder_id=reminder.id,
            name=reminder.name,
            time=reminder.time,
        )
        self._start_signals(reminder)
        return True

    def dismiss(self, now: datetime) -> HistoryEntry | None:
        """
        Resolve the ringing alarm as taken.

        Consumes one dosage from stock (never below zero). A recurring reminder
        is marked resolved for today; a one-time reminder is deactivated.

        Returns:
            The recorded history entry, or None if nothing was ringing.
        """
        reminder = self._active
        if reminder is None:
            logger.debug("alarm_dismiss_ignored")
            return None

        reminder.stock = max(0, reminder.stock - reminder.dosage)
        if reminder.is_recurring:
            reminder.last_triggered_date = now.date()
        else:
            reminder.active = False

        entry = HistoryEntry.for_dismiss(reminder, now)
        self._history.append(entry)
        logger.info(
            "alarm_dismissed",
            reminder_id=reminder.id,
            dosage=reminder.dosage,
            stock=reminder.stock,
        )
        self._release()
        return entry

    def snooze(self, now: datetime) -> HistoryEntry | None:
        """
        Postpone the ringing alarm by the reminder's snooze duration.

        Only the time of day moves, wrapping past midnight; active, repeat days
        and the trigger marker are left alone.

        Returns:
            The recorded history entry, or None if nothing was ringing.
        """
        reminder = self._active
        if reminder is None:
            logger.debug("alarm_snooze_ignored")
            return None

        previous_time = reminder.time
        reminder.time = add_minutes(now, reminder.snooze_duration)

        entry = HistoryEntry.for_snooze(reminder, now)
        self._history.append(entry)
        logger.info(
            "alarm_snoozed",
            reminder_id=reminder.id,
            previous_time=previous_time,
            time=reminder.time,
            snooze_minutes=reminder.snooze_duration,
        )
        self._release()
        return entry

    def _release(self) -> None:
        self._active = None
        self._since = None
        self._message = None
        if self._signal is not None:
            self._safely("stop_alarm_signal", self._signal.stop_alarm_signal)

    def _start_signals(self, reminder: Reminder) -> None:
        signal = self._signal
        if signal is None:
            return

        self._safely("start_alarm_signal", signal.start_alarm_signal, reminder)

        if self._speech_enabled and signal.supports_speech:
            self._safely("announce", signal.announce, announcement(reminder))

        self._safely("show_alarm_message", signal.show_alarm_message, self._message)

    @staticmethod
    def _safely(action: str, func: Callable[..., None], *args: object) -> None:
        # Side effects must never undo or block a state transition.
        try:
            func(*args)
        except Exception:
            logger.warning("alarm_side_effect_failed", action=action, exc_info=True)
