"""Unit tests for domain exceptions."""

import pytest

from src.core.exceptions import (
    AlarmBusyError,
    AlarmError,
    ConfigurationError,
    DatabaseError,
    MedReminderError,
    ParseError,
    ReminderNotFoundError,
    StorageError,
    ValidationError,
)


class TestMedReminderError:
    """Tests for base MedReminderError exception."""

    def test_basic_initialization(self):
        error = MedReminderError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "MedReminderError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = MedReminderError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = MedReminderError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestStorageErrors:
    def test_reminder_not_found(self):
        error = ReminderNotFoundError("abc123")
        assert isinstance(error, StorageError)
        assert error.code == "REMINDER_NOT_FOUND"
        assert error.details["reminder_id"] == "abc123"
        assert "abc123" in error.message

    def test_database_error(self):
        error = DatabaseError("save reminders", "disk I/O error")
        assert error.code == "DATABASE_ERROR"
        assert error.details == {"operation": "save reminders", "error": "disk I/O error"}

    def test_parse_error_is_storage_error(self):
        error = ParseError("import document", "invalid JSON")
        assert isinstance(error, StorageError)
        assert error.code == "PARSE_ERROR"
        assert error.message == "Could not parse import document: invalid JSON"

    def test_parse_error_truncates_reason(self):
        error = ParseError("reminders table", "x" * 500)
        assert len(error.details["reason"]) == 200


class TestValidationError:
    def test_fields(self):
        error = ValidationError("time", "expected HH:MM", "25:00")
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "time"
        assert error.details["value"] == "25:00"

    def test_value_optional(self):
        error = ValidationError("name", "required")
        assert error.details["value"] is None


class TestAlarmErrors:
    def test_alarm_busy(self):
        error = AlarmBusyError("import data", "r1")
        assert isinstance(error, AlarmError)
        assert error.code == "ALARM_BUSY"
        assert error.details == {"operation": "import data", "reminder_id": "r1"}


@pytest.mark.parametrize(
    "error",
    [
        ReminderNotFoundError("x"),
        DatabaseError("op", "err"),
        ParseError("src", "why"),
        ValidationError("f", "m"),
        AlarmBusyError("op", "x"),
        ConfigurationError("bad"),
    ],
)
def test_all_errors_share_base(error):
    assert isinstance(error, MedReminderError)
    assert isinstance(error.to_dict(), dict)
