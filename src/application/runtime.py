"""
Reminder Runtime.

The host around the synchronous scheduling core. It loads the persisted
collections into a ReminderContext at startup, runs every operation under
one lock so ticks and user actions never interleave, and saves whatever an
operation changed before returning.
"""

import asyncio
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from src.config import get_logger, get_settings
from src.config.settings import Settings
from src.core.entities.alarm import AlarmStatus
from src.core.entities.history import HistoryEntry
from src.core.entities.reminder import Reminder
from src.core.exceptions import ParseError, ValidationError
from src.core.interfaces.clock import IClock
from src.core.interfaces.signal import IAlarmSignal
from src.core.interfaces.storage import IHistoryRepository, IReminderRepository
from src.core.services.reminder_context import ReminderContext
from src.core.services.scheduler import TickResult

logger = get_logger(__name__)


class ReminderRuntime:
    """
    Owns the ReminderContext, its repositories and the clock.

    All dependencies are injectable; omitted ones are built from settings
    (SQLite repositories, system clock, logging alarm signal).
    """

    def __init__(
        self,
        reminder_repository: IReminderRepository | None = None,
        history_repository: IHistoryRepository | None = None,
        clock: IClock | None = None,
        signal: IAlarmSignal | None = None,
        settings: Settings | None = None,
    ):
        self._settings = settings or get_settings()
        self._reminder_repo = reminder_repository
        self._history_repo = history_repository
        self._clock = clock
        self._signal = signal

        self._context: ReminderContext | None = None
        self._lock = asyncio.Lock()
        # Collections whose in-memory state is ahead of storage
        self._unsaved: set[str] = set()

    # Wiring

    def _get_reminder_repo(self) -> IReminderRepository:
        if self._reminder_repo is None:
            from src.infrastructure.storage.sqlite import get_reminder_repository

            self._reminder_repo = get_reminder_repository()
        return self._reminder_repo

    def _get_history_repo(self) -> IHistoryRepository:
        if self._history_repo is None:
            from src.infrastructure.storage.sqlite import get_history_repository

            self._history_repo = get_history_repository()
        return self._history_repo

    @property
    def clock(self) -> IClock:
        if self._clock is None:
            from src.infrastructure.clock import SystemClock

            self._clock = SystemClock(self._settings.scheduler.timezone)
        return self._clock

    @property
    def signal(self) -> IAlarmSignal:
        if self._signal is None:
            from src.infrastructure.alarm import LoggingAlarmSignal

            self._signal = LoggingAlarmSignal()
        return self._signal

    @property
    def started(self) -> bool:
        return self._context is not None

    @property
    def context(self) -> ReminderContext:
        if self._context is None:
            raise RuntimeError("ReminderRuntime.start() has not been called")
        return self._context

    def now(self) -> datetime:
        return self.clock.now()

    # Lifecycle

    async def start(self) -> ReminderContext:
        """
        Load persisted state and build the context. Safe to call twice.

        A corrupt collection is logged and replaced by an empty one; the other
        collection is still loaded.
        """
        async with self._lock:
            if self._context is not None:
                return self._context

            reminders = await self._load_or_empty("reminders", self._get_reminder_repo().load)
            history = await self._load_or_empty("history", self._get_history_repo().load)

            try:
                self._context = ReminderContext(
                    reminders=reminders,
                    history=history,
                    signal=self.signal,
                    speech_enabled=self._settings.signal.speech_enabled,
                    low_stock_threshold=self._settings.scheduler.low_stock_threshold,
                )
            except ValidationError as e:
                # Duplicate ids in storage; start clean rather than refuse to run
                logger.error("reminders_load_failed", error=e.message)
                self._context = ReminderContext(
                    history=history,
                    signal=self.signal,
                    speech_enabled=self._settings.signal.speech_enabled,
                    low_stock_threshold=self._settings.scheduler.low_stock_threshold,
                )

            logger.info(
                "reminder_runtime_started",
                reminders=len(self._context.store),
                history=len(self._context.history),
            )
            return self._context

    @staticmethod
    async def _load_or_empty(collection: str, load) -> list:
        try:
            return await load()
        except ParseError as e:
            logger.error(
                "collection_load_failed",
                collection=collection,
                error=e.message,
            )
            return []

    # Scheduling

    async def tick(self, now: datetime | None = None) -> TickResult:
        """
        Run one scheduling pass.

        Persists a daily reset, then retries any write that failed earlier.
        """
        async with self._lock:
            result = self.context.tick(now or self.now())
            if result.state_changed:
                await self._save_reminders()
            await self._flush_unsaved()
            return result

    def alarm_status(self) -> AlarmStatus:
        return self.context.alarm_status()

    async def dismiss(self) -> HistoryEntry | None:
        async with self._lock:
            entry = self.context.dismiss(self.now())
            if entry is not None:
                await self._save_resolution(entry)
            return entry

    async def snooze(self) -> HistoryEntry | None:
        async with self._lock:
            entry = self.context.snooze(self.now())
            if entry is not None:
                await self._save_resolution(entry)
            return entry

    # Reminders

    async def add_reminder(self, spec: Mapping[str, Any]) -> Reminder:
        async with self._lock:
            reminder = self.context.add_reminder(spec)
            await self._save_reminders()
            return reminder

    async def remove_reminder(self, reminder_id: str) -> Reminder:
        async with self._lock:
            reminder = self.context.remove_reminder(reminder_id)
            await self._save_reminders()
            return reminder

    def get_reminder(self, reminder_id: str) -> Reminder:
        return self.context.get_reminder(reminder_id)

    def list_reminders(self) -> list[Reminder]:
        return self.context.list_reminders()

    def low_stock(self) -> list[Reminder]:
        return self.context.low_stock()

    @property
    def low_stock_threshold(self) -> int:
        return self.context.low_stock_threshold

    # History

    def list_history(self) -> list[HistoryEntry]:
        return self.context.list_history()

    async def clear_history(self) -> int:
        async with self._lock:
            removed = self.context.clear_history()
            await self._save_history()
            return removed

    # Export / import

    def export_snapshot(self) -> dict[str, list[dict[str, Any]]]:
        return self.context.export_snapshot()

    async def import_snapshot(self, data: Mapping[str, Any]) -> tuple[bool, bool]:
        async with self._lock:
            reminders_replaced, history_replaced = self.context.import_snapshot(data)
            if reminders_replaced:
                await self._save_reminders()
            if history_replaced:
                await self._save_history()
            return reminders_replaced, history_replaced

    # Persistence
    #
    # A collection is marked unsaved before each write and cleared after it
    # succeeds, so a failed write is retried whole on the next tick or save.

    async def _save_reminders(self) -> None:
        self._unsaved.add("reminders")
        await self._get_reminder_repo().save(self.context.list_reminders())
        self._unsaved.discard("reminders")

    async def _save_history(self) -> None:
        self._unsaved.add("history")
        await self._get_history_repo().save(self.context.list_history())
        self._unsaved.discard("history")

    async def _append_history(self, entry: HistoryEntry) -> None:
        if "history" in self._unsaved:
            await self._save_history()
            return
        self._unsaved.add("history")
        await self._get_history_repo().append(entry)
        self._unsaved.discard("history")

    async def _save_resolution(self, entry: HistoryEntry) -> None:
        # The entry exists only in memory until appended
        self._unsaved.add("reminders")
        await self._append_history(entry)
        await self._save_reminders()

    async def _flush_unsaved(self) -> None:
        if not self._unsaved:
            return
        pending = sorted(self._unsaved)
        if "reminders" in self._unsaved:
            await self._save_reminders()
        if "history" in self._unsaved:
            await self._save_history()
        logger.info("unsaved_changes_written", collections=pending)
