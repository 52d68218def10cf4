"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteHistoryRepository,
    SQLiteReminderRepository,
    close_pool,
    get_connection,
    get_history_repository,
    get_pool,
    get_reminder_repository,
    get_transaction,
)

__all__ = [
    # SQLite repositories
    "SQLiteReminderRepository",
    "SQLiteHistoryRepository",
    "get_reminder_repository",
    "get_history_repository",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
