"""
Alarm signal for headless hosts.

A server has no speaker, so "ringing" is a structured log event and the
visible message is kept for the API to return with the alarm status.
"""

from src.config import get_logger
from src.core.entities.reminder import Reminder
from src.core.interfaces.signal import IAlarmSignal

logger = get_logger(__name__)


class LoggingAlarmSignal(IAlarmSignal):
    """Rings through the log. Speech is not supported."""

    def __init__(self) -> None:
        self.ringing_for: str | None = None
        self.last_message: str | None = None

    def start_alarm_signal(self, reminder: Reminder) -> None:
        self.ringing_for = reminder.id
        logger.warning("alarm_ringing", reminder_id=reminder.id, name=reminder.name)

    def stop_alarm_signal(self) -> None:
        if self.ringing_for is not None:
            logger.info("alarm_silenced", reminder_id=self.ringing_for)
        self.ringing_for = None

    def show_alarm_message(self, text: str) -> None:
        self.last_message = text
        logger.info("alarm_message", message=text)
