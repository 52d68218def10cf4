"""
Application layer - Runtime, use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Hosting the scheduling core in a persistent ReminderRuntime
2. Defining request/response DTOs for API contracts
3. Implementing use cases that coordinate the runtime
4. Providing factory functions for dependency injection
"""

from src.application.runtime import ReminderRuntime
from src.application.services import get_runtime, reset_services, set_runtime
from src.application.use_cases import (
    ExportDataUseCase,
    ExportResult,
    ImportDataUseCase,
    ImportResult,
)

__all__ = [
    # Runtime
    "ReminderRuntime",
    # Use Cases
    "ExportDataUseCase",
    "ExportResult",
    "ImportDataUseCase",
    "ImportResult",
    # Service factories
    "get_runtime",
    "set_runtime",
    "reset_services",
]
