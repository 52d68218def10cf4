"""
Export Data Use Case.

Produces the backup document holding every reminder and the full history,
in the same record shape that import accepts.
"""

import json
from dataclasses import dataclass
from typing import Any

from src.application.runtime import ReminderRuntime
from src.config import get_logger

logger = get_logger(__name__)

EXPORT_FILENAME = "medicine_reminder_data.json"


@dataclass
class ExportResult:
    """Exported document plus a suggested download name."""

    document: dict[str, list[dict[str, Any]]]
    filename: str = EXPORT_FILENAME

    def to_json(self) -> str:
        return json.dumps(self.document, indent=2)


class ExportDataUseCase:
    """Use case for exporting reminders and history."""

    def __init__(self, runtime: ReminderRuntime | None = None):
        self._runtime = runtime

    def _get_runtime(self) -> ReminderRuntime:
        if self._runtime is None:
            from src.application.services import get_runtime

            self._runtime = get_runtime()
        return self._runtime

    def execute(self) -> ExportResult:
        document = self._get_runtime().export_snapshot()
        logger.info(
            "data_exported",
            reminders=len(document["reminders"]),
            history=len(document["history"]),
        )
        return ExportResult(document=document)
