"""Fixtures for application-layer tests: runtime over mocked repositories."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from src.application.runtime import ReminderRuntime
from src.config import get_settings
from src.infrastructure.alarm import LoggingAlarmSignal
from src.infrastructure.clock import FixedClock


@pytest.fixture
def reminder_repo():
    repo = AsyncMock()
    repo.load.return_value = []
    return repo


@pytest.fixture
def history_repo():
    repo = AsyncMock()
    repo.load.return_value = []
    return repo


@pytest.fixture
def clock(monday_0800: datetime) -> FixedClock:
    return FixedClock(monday_0800)


@pytest.fixture
def runtime(reminder_repo, history_repo, clock) -> ReminderRuntime:
    return ReminderRuntime(
        reminder_repository=reminder_repo,
        history_repository=history_repo,
        clock=clock,
        signal=LoggingAlarmSignal(),
        settings=get_settings(),
    )
