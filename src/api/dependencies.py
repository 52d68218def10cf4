"""
Dependency injection container for FastAPI.

Provides the runtime and use cases to route handlers. Tests override
``get_reminder_runtime`` through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from src.application.runtime import ReminderRuntime
from src.application.services import get_runtime
from src.application.use_cases import ExportDataUseCase, ImportDataUseCase
from src.config import Settings, get_settings


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


def get_reminder_runtime() -> ReminderRuntime:
    """Get the started process-wide runtime."""
    return get_runtime()


# Use case dependencies
def get_export_data_use_case(
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ExportDataUseCase:
    """Get export data use case."""
    return ExportDataUseCase(runtime=runtime)


def get_import_data_use_case(
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ImportDataUseCase:
    """Get import data use case."""
    return ImportDataUseCase(runtime=runtime)
