"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.alarm_controller import AlarmController
from src.core.services.history_log import HistoryLog
from src.core.services.reminder_context import ReminderContext
from src.core.services.reminder_store import ReminderStore
from src.core.services.scheduler import Scheduler, TickResult

__all__ = [
    # Reminder collection
    "ReminderStore",
    # History
    "HistoryLog",
    # Alarm state machine
    "AlarmController",
    # Scheduling
    "Scheduler",
    "TickResult",
    # Host context
    "ReminderContext",
]
