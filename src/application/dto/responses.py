"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from src.core.entities.alarm import AlarmStatus
from src.core.entities.history import HistoryEntry
from src.core.entities.reminder import Reminder

# --- Reminders ---


class ReminderResponse(BaseModel):
    """Reminder response DTO."""

    id: str
    name: str
    time: str
    notes: str = ""
    dosage: int
    stock: int
    active: bool
    repeat_days: list[int] = Field(default_factory=list)
    repeat_day_names: list[str] = Field(default_factory=list)
    is_recurring: bool = False
    last_triggered_date: date | None = None
    snooze_duration: int
    color: str
    is_low_stock: bool = False

    @classmethod
    def from_entity(cls, reminder: Reminder, low_stock_threshold: int = 3) -> "ReminderResponse":
        return cls(
            id=reminder.id,
            name=reminder.name,
            time=reminder.time,
            notes=reminder.notes,
            dosage=reminder.dosage,
            stock=reminder.stock,
            active=reminder.active,
            repeat_days=reminder.repeat_days,
            repeat_day_names=reminder.repeat_day_names,
            is_recurring=reminder.is_recurring,
            last_triggered_date=reminder.last_triggered_date,
            snooze_duration=reminder.snooze_duration,
            color=reminder.color,
            is_low_stock=reminder.is_low_stock(low_stock_threshold),
        )


class ReminderListResponse(BaseModel):
    """List of reminders in store order."""

    reminders: list[ReminderResponse]
    total: int
    low_stock_threshold: int = 3


# --- History ---


class HistoryEntryResponse(BaseModel):
    """History entry response DTO."""

    type: str
    name: str
    time: str
    dosage: int | None = None
    snooze_duration: int | None = None
    timestamp: datetime

    @classmethod
    def from_entity(cls, entry: HistoryEntry) -> "HistoryEntryResponse":
        return cls(
            type=entry.kind.value,
            name=entry.name,
            time=entry.time,
            dosage=entry.dosage,
            snooze_duration=entry.snooze_duration,
            timestamp=entry.timestamp,
        )


class HistoryListResponse(BaseModel):
    """Chronological history."""

    entries: list[HistoryEntryResponse]
    total: int


class ClearHistoryResponse(BaseModel):
    """Result of clearing history."""

    cleared: int


# --- Alarm ---


class AlarmStatusResponse(BaseModel):
    """Current alarm slot."""

    state: str
    is_ringing: bool
    reminder_id: str | None = None
    reminder_name: str | None = None
    message: str | None = None
    since: datetime | None = None

    @classmethod
    def from_status(cls, status: AlarmStatus) -> "AlarmStatusResponse":
        return cls(
            state=status.state.value,
            is_ringing=status.is_ringing,
            reminder_id=status.reminder_id,
            reminder_name=status.reminder_name,
            message=status.message,
            since=status.since,
        )


class ResolveAlarmResponse(BaseModel):
    """Outcome of dismiss or snooze. ``resolved`` is false when nothing was ringing."""

    resolved: bool
    entry: HistoryEntryResponse | None = None
    alarm: AlarmStatusResponse


# --- Data transfer ---


class ImportDataResponse(BaseModel):
    """Result of importing a backup document."""

    reminders_replaced: bool
    history_replaced: bool
    reminder_count: int
    history_count: int


# --- Health ---


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class SchedulerHealthResponse(BaseModel):
    """Tick loop status."""

    enabled: bool
    running: bool
    tick_interval_seconds: float
    alarm_state: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None
    scheduler: SchedulerHealthResponse | None = None


# --- Errors ---


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. REMINDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
