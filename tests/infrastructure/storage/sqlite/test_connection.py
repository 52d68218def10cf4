"""Unit tests for SQLite connection pool."""

import asyncio
from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    open_connection,
)


@pytest.fixture(autouse=True)
async def reset_global_pool():
    conn_module._shared = None
    yield
    await close_pool()


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_defaults(self, temp_db_path: Path):
        """Pool stores its path and defaults to two connections."""
        pool = ConnectionPool(temp_db_path)
        assert pool.db_path == temp_db_path
        assert pool.pool_size == 2
        assert pool.busy_timeout == 30000
        assert pool.is_open is False

    async def test_open_creates_directory(self, tmp_path: Path):
        """open() creates the database directory."""
        db_path = tmp_path / "nested" / "reminders.db"
        pool = ConnectionPool(db_path, pool_size=1)

        await pool.open()
        assert db_path.parent.exists()
        await pool.close()

    async def test_open_idempotent(self, temp_db_path: Path):
        """Repeated open calls create the connections once."""
        pool = ConnectionPool(temp_db_path, pool_size=2)

        await pool.open()
        await pool.open()

        assert len(pool._opened) == 2
        assert pool.idle_count == 2
        await pool.close()

    async def test_connection_pragmas(self, temp_db_path: Path):
        """Connections use WAL, the busy timeout and Row access."""
        conn = await open_connection(temp_db_path, busy_timeout=1234)

        cursor = await conn.execute("PRAGMA journal_mode")
        assert (await cursor.fetchone())[0].lower() == "wal"
        cursor = await conn.execute("PRAGMA busy_timeout")
        assert (await cursor.fetchone())[0] == 1234
        assert conn.row_factory == aiosqlite.Row
        await conn.close()


class TestConnectionPoolAcquire:
    """Tests for ConnectionPool.acquire()."""

    async def test_acquire_opens_on_first_use(self, temp_db_path: Path):
        """acquire() opens the pool on first use."""
        pool = ConnectionPool(temp_db_path, pool_size=1)

        async with pool.acquire() as conn:
            assert pool.is_open is True
            assert isinstance(conn, aiosqlite.Connection)

        await pool.close()

    async def test_acquire_returns_on_exception(self, temp_db_path: Path):
        """Connection goes back to the pool even if the body raises."""
        pool = ConnectionPool(temp_db_path, pool_size=1)
        await pool.open()

        with pytest.raises(ValueError):
            async with pool.acquire():
                raise ValueError("Test error")

        assert pool.idle_count == 1
        await pool.close()

    async def test_acquire_blocks_when_exhausted(self, temp_db_path: Path):
        """acquire() waits while every connection is in use."""
        pool = ConnectionPool(temp_db_path, pool_size=1)
        await pool.open()

        async with pool.acquire():
            with pytest.raises(asyncio.TimeoutError):
                async with asyncio.timeout(0.1):
                    async with pool.acquire():
                        pass

        await pool.close()


class TestConnectionPoolTransaction:
    """Tests for ConnectionPool.transaction()."""

    async def test_commits_on_success(self, pool: ConnectionPool):
        async with pool.transaction() as conn:
            await conn.execute(
                "INSERT INTO history (type, name, time, timestamp) VALUES (?, ?, ?, ?)",
                ("dismiss", "Aspirin", "08:00", "2024-01-15T08:00:00"),
            )

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT name FROM history")
            row = await cursor.fetchone()
            assert row["name"] == "Aspirin"

    async def test_rolls_back_on_exception(self, pool: ConnectionPool):
        with pytest.raises(ValueError):
            async with pool.transaction() as conn:
                await conn.execute("DELETE FROM schema_migrations")
                raise ValueError("Force rollback")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM schema_migrations")
            assert (await cursor.fetchone())[0] >= 1


class TestGlobalPool:
    """Tests for the module-level pool helpers."""

    async def test_get_pool_uses_settings(self, mock_settings):
        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            pool1 = await get_pool()
            pool2 = await get_pool()

        assert pool1 is pool2
        assert pool1.db_path == mock_settings.storage.db_path
        assert pool1.pool_size == 1

    async def test_close_pool_clears_global(self, mock_settings):
        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            await get_pool()
        await close_pool()
        assert conn_module._shared is None

    async def test_close_pool_safe_when_none(self):
        await close_pool()

    async def test_get_transaction_then_connection(self, mock_settings, migrated_db: Path):
        mock_settings.storage.db_path = migrated_db

        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            async with get_transaction() as conn:
                await conn.execute(
                    "INSERT INTO history (type, name, time, timestamp) VALUES (?, ?, ?, ?)",
                    ("snooze", "Vitamin D", "09:05", "2024-01-15T09:00:00"),
                )

            async with get_connection() as conn:
                cursor = await conn.execute("SELECT type FROM history")
                assert (await cursor.fetchone())["type"] == "snooze"


class TestConnectionPoolFromSettings:
    def test_reads_storage_settings(self, mock_settings):
        pool = ConnectionPool.from_settings(mock_settings)

        assert pool.db_path == mock_settings.storage.db_path
        assert pool.pool_size == 1
        assert pool.busy_timeout == 5000

    async def test_close_then_reopen(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        await pool.open()
        await pool.close()

        assert pool.is_open is False
        assert pool.idle_count == 0

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT 1")
            assert (await cursor.fetchone())[0] == 1
        await pool.close()
