"""History entries recorded when an alarm is resolved."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.entities.reminder import Reminder


class HistoryKind(str, Enum):
    """How a ringing alarm was resolved."""

    DISMISS = "dismiss"
    SNOOZE = "snooze"


class HistoryEntry(BaseModel):
    """
    Immutable record of one dismiss or snooze.

    ``name`` and ``time`` are snapshots taken at resolution. For a snooze the
    time is the new, postponed time of day.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    kind: HistoryKind = Field(alias="type")
    name: str
    time: str
    dosage: int | None = None
    snooze_duration: int | None = None
    timestamp: datetime

    @classmethod
    def for_dismiss(cls, reminder: Reminder, at: datetime) -> "HistoryEntry":
        return cls(
            kind=HistoryKind.DISMISS,
            name=reminder.name,
            time=reminder.time,
            dosage=reminder.dosage,
            timestamp=at,
        )

    @classmethod
    def for_snooze(cls, reminder: Reminder, at: datetime) -> "HistoryEntry":
        return cls(
            kind=HistoryKind.SNOOZE,
            name=reminder.name,
            time=reminder.time,
            snooze_duration=reminder.snooze_duration,
            timestamp=at,
        )

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted/exported record shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
