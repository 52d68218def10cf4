"""
SQLite implementation of reminder storage.

The reminder collection is small and always handled whole: ``save`` rewrites
the table in one transaction and ``position`` keeps store order.
"""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import aiosqlite
from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.reminder import Reminder
from src.core.exceptions import DatabaseError, ParseError
from src.core.interfaces.storage import IReminderRepository
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


class SQLiteReminderRepository(IReminderRepository):
    """SQLite implementation of reminder storage."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.acquire() as conn:
                yield conn
        else:
            async with get_connection() as conn:
                yield conn

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.transaction() as conn:
                yield conn
        else:
            async with get_transaction() as conn:
                yield conn

    async def load(self) -> list[Reminder]:
        """Load all reminders in store order."""
        try:
            async with self._connection() as conn:
                cursor = await conn.execute("SELECT * FROM reminders ORDER BY position ASC")
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise DatabaseError("load reminders", str(e)) from e

        reminders = [self._row_to_entity(row) for row in rows]
        logger.debug("reminders_loaded", count=len(reminders))
        return reminders

    async def save(self, reminders: list[Reminder]) -> None:
        """Replace all persisted reminders."""
        updated_at = datetime.now(UTC).isoformat()
        try:
            async with self._transaction() as conn:
                await conn.execute("DELETE FROM reminders")
                await conn.executemany(
                    """
                    INSERT INTO reminders (
                        id, position, name, time, notes, dosage, stock,
                        active, repeat_days, last_triggered_date,
                        snooze_duration, color, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        self._entity_to_params(position, reminder, updated_at)
                        for position, reminder in enumerate(reminders)
                    ],
                )
        except aiosqlite.Error as e:
            raise DatabaseError("save reminders", str(e)) from e

        logger.debug("reminders_saved", count=len(reminders))

    @staticmethod
    def _entity_to_params(position: int, reminder: Reminder, updated_at: str) -> tuple:
        return (
            reminder.id,
            position,
            reminder.name,
            reminder.time,
            reminder.notes,
            reminder.dosage,
            reminder.stock,
            1 if reminder.active else 0,
            json.dumps(reminder.repeat_days),
            reminder.last_triggered_date.isoformat() if reminder.last_triggered_date else None,
            reminder.snooze_duration,
            reminder.color,
            updated_at,
        )

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Reminder:
        """Convert a database row to a Reminder entity."""
        try:
            return Reminder(
                id=row["id"],
                name=row["name"],
                time=row["time"],
                notes=row["notes"],
                dosage=row["dosage"],
                stock=row["stock"],
                active=bool(row["active"]),
                repeat_days=json.loads(row["repeat_days"] or "[]"),
                last_triggered_date=row["last_triggered_date"],
                snooze_duration=row["snooze_duration"],
                color=row["color"],
            )
        except (PydanticValidationError, json.JSONDecodeError) as e:
            logger.error("reminder_row_corrupt", reminder_id=row["id"], error=str(e))
            raise ParseError("reminders table", f"row {row['id']!r}: {e}") from e
