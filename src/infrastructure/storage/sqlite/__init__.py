"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.history_store import SQLiteHistoryRepository
from src.infrastructure.storage.sqlite.reminder_store import SQLiteReminderRepository

# Singleton instances
_reminder_repository: SQLiteReminderRepository | None = None
_history_repository: SQLiteHistoryRepository | None = None


def get_reminder_repository() -> SQLiteReminderRepository:
    """Get singleton reminder repository instance."""
    global _reminder_repository
    if _reminder_repository is None:
        _reminder_repository = SQLiteReminderRepository()
    return _reminder_repository


def get_history_repository() -> SQLiteHistoryRepository:
    """Get singleton history repository instance."""
    global _history_repository
    if _history_repository is None:
        _history_repository = SQLiteHistoryRepository()
    return _history_repository


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Repositories
    "SQLiteReminderRepository",
    "SQLiteHistoryRepository",
    # Factory functions
    "get_reminder_repository",
    "get_history_repository",
]
