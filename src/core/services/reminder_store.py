"""
Reminder Store.

Owns the ordered collection of reminders. The store validates on the way in
and hands out the entities themselves; the scheduler and alarm controller are
the only writers of stock, active and the per-day trigger marker.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.reminder import Reminder
from src.core.exceptions import ReminderNotFoundError, ValidationError

logger = get_logger(__name__)

# State fields a caller may not set on creation, by field name and alias
_STATE_FIELDS = ("active", "last_triggered_date", "lastTriggeredDate")


def to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Convert the first pydantic error into a domain ValidationError."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "reminder"
    message = error["msg"].removeprefix("Value error, ")
    return ValidationError(field, message, error.get("input"))


class ReminderStore:
    """In-memory ordered reminder collection with entity invariants."""

    def __init__(self, reminders: Iterable[Reminder] | None = None) -> None:
        self._reminders: list[Reminder] = []
        if reminders is not None:
            self.replace_all(reminders)

    def __len__(self) -> int:
        return len(self._reminders)

    def __iter__(self) -> Iterator[Reminder]:
        return iter(list(self._reminders))

    def add(self, spec: Mapping[str, Any]) -> Reminder:
        """
        Validate and insert a new reminder.

        The reminder starts active with no trigger marker, whatever spec says.

        Args:
            spec: Reminder fields, by field name or camelCase alias.

        Returns:
            The inserted reminder.

        Raises:
            ValidationError: If a field is malformed. The store is unchanged.
        """
        data = {k: v for k, v in spec.items() if k not in _STATE_FIELDS}
        try:
            reminder = Reminder.model_validate(
                {**data, "active": True, "last_triggered_date": None}
            )
        except PydanticValidationError as e:
            raise to_validation_error(e) from e

        if self._find(reminder.id) is not None:
            raise ValidationError("id", "duplicate reminder id", reminder.id)

        self._reminders.append(reminder)
        logger.info(
            "reminder_added",
            reminder_id=reminder.id,
            name=reminder.name,
            time=reminder.time,
            repeat_days=reminder.repeat_days,
        )
        return reminder

    def remove(self, reminder_id: str) -> Reminder:
        """
        Delete a reminder by identity.

        Raises:
            ReminderNotFoundError: If no reminder has this id.
        """
        reminder = self.get(reminder_id)
        self._reminders.remove(reminder)
        logger.info("reminder_removed", reminder_id=reminder_id, name=reminder.name)
        return reminder

    def get(self, reminder_id: str) -> Reminder:
        reminder = self._find(reminder_id)
        if reminder is None:
            raise ReminderNotFoundError(reminder_id)
        return reminder

    def list(self) -> list[Reminder]:
        """Reminders in insertion order."""
        return list(self._reminders)

    def replace_all(self, reminders: Iterable[Reminder]) -> None:
        """
        Replace the whole collection (load and import).

        Raises:
            ValidationError: On duplicate ids. The store is unchanged.
        """
        incoming = list(reminders)
        seen: set[str] = set()
        for reminder in incoming:
            if reminder.id in seen:
                raise ValidationError("id", "duplicate reminder id", reminder.id)
            seen.add(reminder.id)
        self._reminders = incoming

    def _find(self, reminder_id: str) -> Reminder | None:
        for reminder in self._reminders:
            if reminder.id == reminder_id:
                return reminder
        return None
