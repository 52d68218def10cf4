"""
Reminder Context.

The explicit scheduler context the host owns: reminder store, history log,
alarm controller and scheduler wired together. Everything here is synchronous;
persistence is the host's job after each call.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.alarm import AlarmStatus
from src.core.entities.history import HistoryEntry
from src.core.entities.reminder import Reminder
from src.core.exceptions import AlarmBusyError, ParseError, ValidationError
from src.core.interfaces.signal import IAlarmSignal
from src.core.services.alarm_controller import AlarmController
from src.core.services.history_log import HistoryLog
from src.core.services.reminder_store import ReminderStore
from src.core.services.scheduler import Scheduler, TickResult

logger = get_logger(__name__)


class ReminderContext:
    """Host-owned bundle of the scheduling core."""

    def __init__(
        self,
        reminders: Iterable[Reminder] | None = None,
        history: Iterable[HistoryEntry] | None = None,
        signal: IAlarmSignal | None = None,
        speech_enabled: bool = True,
        low_stock_threshold: int = 3,
    ) -> None:
        self.store = ReminderStore(reminders)
        self.history = HistoryLog(history)
        self.alarm = AlarmController(self.history, signal, speech_enabled)
        self.scheduler = Scheduler(self.store, self.alarm)
        self.low_stock_threshold = low_stock_threshold

    # Scheduling

    def tick(self, now: datetime) -> TickResult:
        return self.scheduler.tick(now)

    def alarm_status(self) -> AlarmStatus:
        return self.alarm.status()

    def dismiss(self, now: datetime) -> HistoryEntry | None:
        return self.alarm.dismiss(now)

    def snooze(self, now: datetime) -> HistoryEntry | None:
        return self.alarm.snooze(now)

    # Reminders

    def add_reminder(self, spec: Mapping[str, Any]) -> Reminder:
        return self.store.add(spec)

    def remove_reminder(self, reminder_id: str) -> Reminder:
        return self.store.remove(reminder_id)

    def get_reminder(self, reminder_id: str) -> Reminder:
        return self.store.get(reminder_id)

    def list_reminders(self) -> list[Reminder]:
        return self.store.list()

    def low_stock(self) -> list[Reminder]:
        return [r for r in self.store.list() if r.is_low_stock(self.low_stock_threshold)]

    # History

    def list_history(self) -> list[HistoryEntry]:
        return self.history.list()

    def clear_history(self) -> int:
        return self.history.clear()

    # Export / import

    def export_snapshot(self) -> dict[str, list[dict[str, Any]]]:
        """Both collections in the persisted record shape."""
        return {
            "reminders": [r.to_record() for r in self.store.list()],
            "history": [e.to_record() for e in self.history.list()],
        }

    def import_snapshot(self, data: Mapping[str, Any]) -> tuple[bool, bool]:
        """
        Replace reminders and/or history from an exported document.

        Each key is applied only when present and a list. Nothing changes
        unless every record in the document is valid.

        Returns:
            (reminders_replaced, history_replaced)

        Raises:
            AlarmBusyError: If an alarm is ringing.
            ParseError: If a record is invalid.
        """
        ringing = self.alarm.active_reminder
        if ringing is not None:
            raise AlarmBusyError("import data", ringing.id)

        reminders: list[Reminder] | None = None
        history: list[HistoryEntry] | None = None

        try:
            if isinstance(data.get("reminders"), list):
                reminders = [Reminder.model_validate(rec) for rec in data["reminders"]]
            if isinstance(data.get("history"), list):
                history = [HistoryEntry.model_validate(rec) for rec in data["history"]]
        except PydanticValidationError as e:
            raise ParseError("import document", str(e)) from e

        if reminders is not None:
            try:
                self.store.replace_all(reminders)
            except ValidationError as e:
                raise ParseError("import document", e.message) from e
        if history is not None:
            self.history.replace_all(history)

        logger.info(
            "data_imported",
            reminders=len(reminders) if reminders is not None else None,
            history=len(history) if history is not None else None,
        )
        return reminders is not None, history is not None
