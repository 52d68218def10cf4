"""
Periodic task utilities.

Runs an async callable every N seconds for the lifetime of the FastAPI app.
A failing run is logged and the loop carries on; the next run is scheduled
only after the previous one returns, so runs never overlap.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:  # pragma: no cover
    from fastapi import FastAPI


_TASKS_STATE_KEY = "periodic_tasks"


def get_periodic_tasks(app: FastAPI) -> list[asyncio.Task[None]]:
    return list(getattr(app.state, _TASKS_STATE_KEY, None) or [])


def start_periodic_task(
    app: FastAPI,
    *,
    name: str,
    interval_seconds: float,
    wait_first: bool,
    func: Callable[[], Awaitable[None]],
    logger: structlog.stdlib.BoundLogger,
) -> asyncio.Task[None]:
    """
    Start a periodic task and register it on app.state.

    Args:
        app: FastAPI app owning the task.
        name: asyncio task name.
        interval_seconds: Pause between runs.
        wait_first: Sleep one interval before the first run.
        func: One run.
        logger: Logger for run failures.

    Returns:
        The created task.
    """
    tasks = getattr(app.state, _TASKS_STATE_KEY, None)
    if tasks is None:
        tasks = []
        setattr(app.state, _TASKS_STATE_KEY, tasks)

    async def _runner() -> None:
        if wait_first:
            await asyncio.sleep(interval_seconds)

        while True:
            try:
                await func()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception("periodic_task_failed", task=name, error=str(e))

            await asyncio.sleep(interval_seconds)

    task = asyncio.create_task(_runner(), name=name)
    tasks.append(task)
    logger.info("periodic_task_started", task=name, interval_seconds=interval_seconds)
    return task


async def stop_periodic_tasks(app: FastAPI, *, logger: structlog.stdlib.BoundLogger) -> None:
    """Cancel every task registered on app.state and wait for them to finish."""
    tasks: list[asyncio.Task[None]] | None = getattr(app.state, _TASKS_STATE_KEY, None)
    if not tasks:
        return

    for task in tasks:
        task.cancel()

    try:
        await asyncio.gather(*tasks, return_exceptions=True)
    finally:
        setattr(app.state, _TASKS_STATE_KEY, [])
        logger.info("periodic_tasks_stopped", count=len(tasks))
