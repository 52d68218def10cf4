"""Core domain entities."""

from src.core.entities.alarm import AlarmState, AlarmStatus
from src.core.entities.history import HistoryEntry, HistoryKind
from src.core.entities.reminder import Reminder, new_reminder_id

__all__ = [
    # Reminder entities
    "Reminder",
    "new_reminder_id",
    # History entities
    "HistoryEntry",
    "HistoryKind",
    # Alarm entities
    "AlarmState",
    "AlarmStatus",
]
