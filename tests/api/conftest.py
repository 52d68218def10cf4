"""Fixtures for API tests.

ASGITransport does not run the lifespan, so each test gets a started
runtime over mocked repositories and a fixed clock, installed through
dependency overrides.
"""

from collections.abc import AsyncGenerator
from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_app_settings, get_reminder_runtime
from src.api.main import app
from src.application.runtime import ReminderRuntime
from src.config import get_settings
from src.infrastructure.alarm import LoggingAlarmSignal
from src.infrastructure.clock import FixedClock


@pytest.fixture
def clock(monday_0800: datetime) -> FixedClock:
    return FixedClock(monday_0800)


@pytest.fixture
def repositories() -> tuple[AsyncMock, AsyncMock]:
    reminder_repo = AsyncMock()
    reminder_repo.load.return_value = []
    history_repo = AsyncMock()
    history_repo.load.return_value = []
    return reminder_repo, history_repo


@pytest.fixture
async def runtime(repositories, clock) -> ReminderRuntime:
    reminder_repo, history_repo = repositories
    runtime = ReminderRuntime(
        reminder_repository=reminder_repo,
        history_repository=history_repo,
        clock=clock,
        signal=LoggingAlarmSignal(),
    )
    await runtime.start()
    return runtime


@pytest.fixture
async def api_client(runtime: ReminderRuntime) -> AsyncGenerator[AsyncClient, None]:
    """Async client bound to the test runtime."""
    app.dependency_overrides[get_reminder_runtime] = lambda: runtime
    app.dependency_overrides[get_app_settings] = get_settings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
