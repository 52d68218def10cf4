"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_app_settings, get_reminder_runtime
from src.api.periodic import get_periodic_tasks
from src.application.dto.responses import (
    HealthResponse,
    ProviderHealthResponse,
    SchedulerHealthResponse,
)
from src.application.runtime import ReminderRuntime
from src.config import Settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def _scheduler_status(
    request: Request,
    settings: Settings,
    runtime: ReminderRuntime,
) -> SchedulerHealthResponse:
    running = any(not task.done() for task in get_periodic_tasks(request.app))
    return SchedulerHealthResponse(
        enabled=settings.scheduler.enabled,
        running=running,
        tick_interval_seconds=settings.scheduler.tick_interval_seconds,
        alarm_state=runtime.alarm_status().state.value if runtime.started else None,
    )


@router.get("", response_model=HealthResponse)
async def health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and the tick loop state.
    """
    scheduler = _scheduler_status(request, settings, runtime)
    degraded = scheduler.enabled and not scheduler.running
    return HealthResponse(
        status="degraded" if degraded else "healthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        scheduler=scheduler,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health(
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from src.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        latency = (time.time() - start) * 1000

        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=latency,
        )

    except Exception as e:
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=False,
            error=str(e),
        )

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
