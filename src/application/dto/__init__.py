"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import CreateReminderRequest
from src.application.dto.responses import (
    AlarmStatusResponse,
    ClearHistoryResponse,
    ErrorResponse,
    HealthResponse,
    HistoryEntryResponse,
    HistoryListResponse,
    ImportDataResponse,
    ProviderHealthResponse,
    ReminderListResponse,
    ReminderResponse,
    ResolveAlarmResponse,
    SchedulerHealthResponse,
)

__all__ = [
    # Requests
    "CreateReminderRequest",
    # Reminders
    "ReminderResponse",
    "ReminderListResponse",
    # History
    "HistoryEntryResponse",
    "HistoryListResponse",
    "ClearHistoryResponse",
    # Alarm
    "AlarmStatusResponse",
    "ResolveAlarmResponse",
    # Data transfer
    "ImportDataResponse",
    # Health
    "HealthResponse",
    "ProviderHealthResponse",
    "SchedulerHealthResponse",
    # Errors
    "ErrorResponse",
]
