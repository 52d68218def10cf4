"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.clock import IClock
from src.core.interfaces.signal import IAlarmSignal
from src.core.interfaces.storage import IHistoryRepository, IReminderRepository

__all__ = [
    # Storage interfaces
    "IReminderRepository",
    "IHistoryRepository",
    # Host interfaces
    "IClock",
    "IAlarmSignal",
]
