"""
Domain exceptions for the medication reminder service.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class MedReminderError(Exception):
    """Base exception for all medication reminder errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(MedReminderError):
    """Base exception for storage operations."""

    pass


class ReminderNotFoundError(StorageError):
    """Reminder not found in the store."""

    def __init__(self, reminder_id: str):
        super().__init__(
            f"Reminder not found: {reminder_id}",
            code="REMINDER_NOT_FOUND",
            details={"reminder_id": reminder_id},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ParseError(StorageError):
    """Persisted or imported data could not be decoded."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Could not parse {source}: {reason}",
            code="PARSE_ERROR",
            details={"source": source, "reason": reason[:200]},
        )


# Validation Exceptions
class ValidationError(MedReminderError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Alarm Exceptions
class AlarmError(MedReminderError):
    """Base exception for alarm operations."""

    pass


class AlarmBusyError(AlarmError):
    """Operation is not allowed while an alarm is ringing."""

    def __init__(self, operation: str, reminder_id: str):
        super().__init__(
            f"Cannot {operation} while reminder {reminder_id} is ringing",
            code="ALARM_BUSY",
            details={"operation": operation, "reminder_id": reminder_id},
        )


class ConfigurationError(MedReminderError):
    """Configuration error."""

    pass
