"""Reminder entity for scheduled medication doses."""

from datetime import date, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.core.time_of_day import DAY_NAMES, is_valid_time

# Date format written by older browser exports ("Mon Jan 15 2024")
_LEGACY_DATE_FORMAT = "%a %b %d %Y"


def new_reminder_id() -> str:
    """Generate an opaque reminder identity."""
    return uuid4().hex


class Reminder(BaseModel):
    """
    Medication reminder.

    A reminder with an empty ``repeat_days`` rings once; otherwise it rings on
    each listed weekday (Sunday=0). Field names serialize in camelCase, which
    is the persisted and exported record shape.

    Assignments are validated, so ``stock`` can never go negative and
    ``time`` always stays a valid "HH:MM" string.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    id: str = Field(default_factory=new_reminder_id)
    name: str = Field(min_length=1)
    time: str
    notes: str = ""
    dosage: int = Field(default=1, ge=0, strict=True)
    stock: int = Field(default=0, ge=0, strict=True)
    active: bool = True
    repeat_days: list[int] = Field(default_factory=list)
    last_triggered_date: date | None = None
    snooze_duration: int = Field(default=5, ge=0, strict=True)
    color: str = "#4a90d9"

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        # Browser exports used millisecond timestamps as ids
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("notes", mode="before")
    @classmethod
    def notes_default(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not is_valid_time(v):
            raise ValueError(f"expected HH:MM between 00:00 and 23:59, got {v!r}")
        return v

    @field_validator("repeat_days", mode="before")
    @classmethod
    def validate_repeat_days(cls, v: Any) -> list[int]:
        if v is None:
            return []
        if not isinstance(v, list | tuple | set | frozenset):
            raise ValueError("repeat days must be a list of weekday numbers")
        days: set[int] = set()
        for day in v:
            if isinstance(day, bool) or not isinstance(day, int):
                raise ValueError(f"weekday must be an integer, got {day!r}")
            if not 0 <= day <= 6:
                raise ValueError(f"weekday must be between 0 and 6, got {day}")
            days.add(day)
        return sorted(days)

    @field_validator("last_triggered_date", mode="before")
    @classmethod
    def parse_legacy_date(cls, v: Any) -> Any:
        if isinstance(v, str) and v and not v[:4].isdigit():
            try:
                return datetime.strptime(v, _LEGACY_DATE_FORMAT).date()
            except ValueError:
                return v
        return v

    @property
    def is_recurring(self) -> bool:
        """Reminder repeats on one or more weekdays."""
        return bool(self.repeat_days)

    @property
    def repeat_day_names(self) -> list[str]:
        return [DAY_NAMES[day] for day in self.repeat_days]

    def is_low_stock(self, threshold: int = 3) -> bool:
        """Advisory warning: a few doses left, but not none."""
        return 0 < self.stock <= threshold

    def rings_on(self, day: int) -> bool:
        """Check whether a recurring reminder is scheduled for weekday day."""
        return day in self.repeat_days

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted/exported record shape."""
        return self.model_dump(mode="json", by_alias=True)
