"""Tests for HistoryEntry entity."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.core.entities.history import HistoryEntry, HistoryKind
from src.core.entities.reminder import Reminder


@pytest.fixture
def reminder() -> Reminder:
    return Reminder(name="Aspirin", time="08:00", dosage=2, snooze_duration=10)


class TestHistoryEntry:
    def test_for_dismiss(self, reminder):
        at = datetime(2024, 1, 15, 8, 0)
        entry = HistoryEntry.for_dismiss(reminder, at)
        assert entry.kind == HistoryKind.DISMISS
        assert entry.name == "Aspirin"
        assert entry.time == "08:00"
        assert entry.dosage == 2
        assert entry.snooze_duration is None
        assert entry.timestamp == at

    def test_for_snooze(self, reminder):
        entry = HistoryEntry.for_snooze(reminder, datetime(2024, 1, 15, 8, 0))
        assert entry.kind == HistoryKind.SNOOZE
        assert entry.snooze_duration == 10
        assert entry.dosage is None

    def test_is_frozen(self, reminder):
        entry = HistoryEntry.for_dismiss(reminder, datetime(2024, 1, 15, 8, 0))
        with pytest.raises(ValidationError):
            entry.name = "Other"

    def test_to_record_omits_unused_fields(self, reminder):
        entry = HistoryEntry.for_dismiss(reminder, datetime(2024, 1, 15, 8, 0))
        assert entry.to_record() == {
            "type": "dismiss",
            "name": "Aspirin",
            "time": "08:00",
            "dosage": 2,
            "timestamp": "2024-01-15T08:00:00",
        }

    def test_snooze_record_uses_camel_case(self, reminder):
        entry = HistoryEntry.for_snooze(reminder, datetime(2024, 1, 15, 8, 0))
        assert entry.to_record()["snoozeDuration"] == 10

    def test_parses_exported_record(self):
        entry = HistoryEntry.model_validate(
            {
                "type": "snooze",
                "name": "Aspirin",
                "time": "08:10",
                "snoozeDuration": 10,
                "timestamp": "2024-01-15T08:00:00.000Z",
            }
        )
        assert entry.kind == HistoryKind.SNOOZE
        assert entry.snooze_duration == 10

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            HistoryEntry.model_validate(
                {"type": "skip", "name": "A", "time": "08:00", "timestamp": "2024-01-15T08:00:00"}
            )
