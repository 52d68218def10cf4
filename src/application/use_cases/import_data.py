"""
Import Data Use Case.

Replaces reminders and/or history from a previously exported document.
Each collection is replaced only when its key is present and holds a list,
so a document with just "history" leaves the reminders alone.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.application.runtime import ReminderRuntime
from src.config import get_logger
from src.core.exceptions import ParseError

logger = get_logger(__name__)


@dataclass
class ImportResult:
    """Result of an import."""

    reminders_replaced: bool = False
    history_replaced: bool = False
    reminder_count: int = 0
    history_count: int = 0


class ImportDataUseCase:
    """Use case for importing an exported backup document."""

    def __init__(self, runtime: ReminderRuntime | None = None):
        self._runtime = runtime

    def _get_runtime(self) -> ReminderRuntime:
        if self._runtime is None:
            from src.application.services import get_runtime

            self._runtime = get_runtime()
        return self._runtime

    @staticmethod
    def decode(payload: str | bytes | Mapping[str, Any]) -> Mapping[str, Any]:
        """
        Decode raw JSON text into a document.

        Raises:
            ParseError: If the payload is not a JSON object.
        """
        if isinstance(payload, Mapping):
            return payload
        try:
            document = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError("import document", f"invalid JSON: {e}") from e
        if not isinstance(document, dict):
            raise ParseError("import document", "expected a JSON object")
        return document

    async def execute(self, payload: str | bytes | Mapping[str, Any]) -> ImportResult:
        """
        Import a document.

        Raises:
            ParseError: If the payload or any record in it is invalid.
                Nothing is changed.
            AlarmBusyError: If an alarm is ringing.
        """
        document = self.decode(payload)
        runtime = self._get_runtime()

        reminders_replaced, history_replaced = await runtime.import_snapshot(document)

        return ImportResult(
            reminders_replaced=reminders_replaced,
            history_replaced=history_replaced,
            reminder_count=len(runtime.list_reminders()),
            history_count=len(runtime.list_history()),
        )
