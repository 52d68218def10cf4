"""SQLite implementation of history storage."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite
from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.history import HistoryEntry
from src.core.exceptions import DatabaseError, ParseError
from src.core.interfaces.storage import IHistoryRepository
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)

_INSERT_SQL = """
    INSERT INTO history (type, name, time, dosage, snooze_duration, timestamp)
    VALUES (?, ?, ?, ?, ?, ?)
"""


class SQLiteHistoryRepository(IHistoryRepository):
    """SQLite implementation of history storage. Row id order is chronological."""

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

    async def load(self) -> list[HistoryEntry]:
        try:
            async with self._connection() as conn:
                cursor = await conn.execute("SELECT * FROM history ORDER BY id ASC")
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise DatabaseError("load history", str(e)) from e
        return [self._row_to_entity(row) for row in rows]

    async def save(self, entries: list[HistoryEntry]) -> None:
        try:
            async with self._transaction() as conn:
                await conn.execute("DELETE FROM history")
                await conn.executemany(_INSERT_SQL, [self._entity_to_params(e) for e in entries])
        except aiosqlite.Error as e:
            raise DatabaseError("save history", str(e)) from e
        logger.debug("history_saved", count=len(entries))

    async def append(self, entry: HistoryEntry) -> None:
        try:
            async with self._transaction() as conn:
                await conn.execute(_INSERT_SQL, self._entity_to_params(entry))
        except aiosqlite.Error as e:
            raise DatabaseError("append history", str(e)) from e

    @staticmethod
    def _entity_to_params(entry: HistoryEntry) -> tuple:
        return (
            entry.kind.value,
            entry.name,
            entry.time,
            entry.dosage,
            entry.snooze_duration,
            entry.timestamp.isoformat(),
        )

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> HistoryEntry:
        try:
            return HistoryEntry(
                kind=row["type"],
                name=row["name"],
                time=row["time"],
                dosage=row["dosage"],
                snooze_duration=row["snooze_duration"],
                timestamp=row["timestamp"],
            )
        except PydanticValidationError as e:
            logger.error("history_row_corrupt", row_id=row["id"], error=str(e))
            raise ParseError("history table", f"row {row['id']}: {e}") from e
