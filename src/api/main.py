"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.periodic import start_periodic_task, stop_periodic_tasks
from src.api.routes import (
    alarm_router,
    data_router,
    health_router,
    history_router,
    reminders_router,
)
from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

TICK_TASK_NAME = "reminder-tick"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database, loads reminders and history into the runtime and
    starts the tick loop. Shutdown stops the loop before closing the pool so
    no tick writes to a closed connection.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    # Initialize database
    try:
        from src.infrastructure.storage.sqlite import get_pool
        from src.infrastructure.storage.sqlite.migrations.migrator import run_migrations

        await run_migrations()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    # Load persisted state
    from src.application.services import get_runtime

    runtime = get_runtime()
    await runtime.start()

    # Tick loop
    if settings.scheduler.enabled:

        async def _tick() -> None:
            await runtime.tick()

        start_periodic_task(
            app,
            name=TICK_TASK_NAME,
            interval_seconds=settings.scheduler.tick_interval_seconds,
            wait_first=False,
            func=_tick,
            logger=logger,
        )
    else:
        logger.warning("scheduler_disabled")

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")

    await stop_periodic_tasks(app, logger=logger)

    # Silence a ringing alarm; the reminder stays due and rings again next start
    if runtime.alarm_status().is_ringing:
        runtime.signal.stop_alarm_signal()

    try:
        from src.infrastructure.storage.sqlite import close_pool

        await close_pool()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Medication Reminder API",
        description="Medication reminders, dose stock tracking and alarm history",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(reminders_router)
    app.include_router(alarm_router)
    app.include_router(history_router)
    app.include_router(data_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Return API info."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    # Root health endpoint (for docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
