"""Startup and shutdown of the full application against a temp database."""

import pytest

from src.api.main import TICK_TASK_NAME, create_app, lifespan
from src.api.periodic import get_periodic_tasks
from src.application.services import get_runtime, reset_services
from src.config import get_settings, reset_settings
from src.infrastructure.storage.sqlite.migrations import get_migration_status


@pytest.fixture(autouse=True)
def fast_ticks(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SCHEDULER_TICK_INTERVAL_SECONDS", "0.01")
    reset_settings()


async def test_lifespan_migrates_loads_and_ticks():
    app = create_app()

    async with lifespan(app):
        runtime = get_runtime()
        assert runtime.started
        tasks = get_periodic_tasks(app)
        assert [t.get_name() for t in tasks] == [TICK_TASK_NAME]

        await runtime.add_reminder({"name": "Aspirin", "time": "08:00"})

    assert get_periodic_tasks(app) == []
    status = await get_migration_status(get_settings().storage.db_path)
    assert status["missing_tables"] == []


async def test_state_survives_restart():
    app = create_app()
    async with lifespan(app):
        await get_runtime().add_reminder({"id": "r1", "name": "Aspirin", "time": "08:00"})

    reset_services()
    async with lifespan(app):
        assert [r.id for r in get_runtime().list_reminders()] == ["r1"]


async def test_scheduler_disabled(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SCHEDULER_ENABLED", "false")
    reset_settings()
    app = create_app()

    async with lifespan(app):
        assert get_periodic_tasks(app) == []
