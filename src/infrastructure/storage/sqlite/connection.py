"""
SQLite connections for the reminder database.

Reminders and history are written whole from one event loop, so the pool
holds a small fixed set of aiosqlite connections and lends each to one
holder at a time. Two saves never share a connection mid-transaction.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import Settings, get_logger, get_settings

logger = get_logger(__name__)

# Applied to every connection before it is lent out
_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
)


async def open_connection(db_path: Path, busy_timeout: int) -> aiosqlite.Connection:
    """Open one connection with WAL, the busy timeout and ``Row`` results."""
    conn = await aiosqlite.connect(db_path)
    for pragma in _PRAGMAS:
        await conn.execute(pragma)
    await conn.execute(f"PRAGMA busy_timeout={int(busy_timeout)}")
    conn.row_factory = aiosqlite.Row
    return conn


class ConnectionPool:
    """Fixed set of connections to one database file, opened lazily."""

    def __init__(self, db_path: Path, pool_size: int = 2, busy_timeout: int = 30000):
        self.db_path = Path(db_path)
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._opened: list[aiosqlite.Connection] = []
        self._guard = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ConnectionPool":
        storage = (settings or get_settings()).storage
        return cls(
            storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )

    @property
    def is_open(self) -> bool:
        return bool(self._opened)

    @property
    def idle_count(self) -> int:
        """Connections not currently lent out."""
        return self._idle.qsize()

    async def open(self) -> None:
        """Create the database directory and every connection. Safe to repeat."""
        async with self._guard:
            if self._opened:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await open_connection(self.db_path, self.busy_timeout)
                self._opened.append(conn)
                self._idle.put_nowait(conn)

            logger.info(
                "connection_pool_opened",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection, waiting while all of them are lent out.

            async with pool.acquire() as conn:
                await conn.execute("SELECT 1")
        """
        if not self.is_open:
            await self.open()

        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; commit on a clean exit, roll back on error."""
        async with self.acquire() as conn:
            try:
                yield conn
            except Exception:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        async with self._guard:
            opened, self._opened = self._opened, []
            self._idle = asyncio.Queue()
            for conn in opened:
                await conn.close()

        if opened:
            logger.info("connection_pool_closed", db_path=str(self.db_path))


# Process-wide pool built from settings on first use
_shared: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    global _shared
    if _shared is None:
        _shared = ConnectionPool.from_settings(get_settings())
        await _shared.open()
    return _shared


async def close_pool() -> None:
    global _shared
    pool, _shared = _shared, None
    if pool is not None:
        await pool.close()


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a connection from the shared pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Run a transaction on a connection from the shared pool."""
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
