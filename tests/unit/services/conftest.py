"""Pytest configuration for unit service tests.

The scheduling core is synchronous; these fixtures wire it with a mocked
alarm signal and nothing else.
"""

from unittest.mock import MagicMock

import pytest

from src.core.interfaces.signal import IAlarmSignal
from src.core.services import AlarmController, HistoryLog, ReminderStore, Scheduler


@pytest.fixture
def signal() -> MagicMock:
    """Alarm signal double. Speech is off unless a test turns it on."""
    mock = MagicMock(spec=IAlarmSignal)
    mock.supports_speech = False
    return mock


@pytest.fixture
def store() -> ReminderStore:
    return ReminderStore()


@pytest.fixture
def history() -> HistoryLog:
    return HistoryLog()


@pytest.fixture
def alarm(history: HistoryLog, signal: MagicMock) -> AlarmController:
    return AlarmController(history, signal)


@pytest.fixture
def scheduler(store: ReminderStore, alarm: AlarmController) -> Scheduler:
    return Scheduler(store, alarm)
