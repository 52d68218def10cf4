"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from src.application.services import reset_services
from src.config import reset_settings
from src.core.entities.reminder import Reminder

# Monday 15 January 2024, 08:00. Weekday index 1 (Sunday=0).
MONDAY_0800 = datetime(2024, 1, 15, 8, 0)


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Point storage at a temp dir and drop cached singletons around each test."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("SCHEDULER_TIMEZONE", raising=False)
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def monday_0800() -> datetime:
    return MONDAY_0800


@pytest.fixture
def make_reminder() -> Callable[..., Reminder]:
    """Factory for reminders with sensible defaults."""

    def _make(**overrides: Any) -> Reminder:
        data: dict[str, Any] = {
            "name": "Aspirin",
            "time": "08:00",
            "dosage": 1,
            "stock": 10,
        }
        data.update(overrides)
        return Reminder(**data)

    return _make
