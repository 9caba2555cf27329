"""
Async SQLite connection pool with aiosqlite.

A report issues one query per movement category at the same time, and each
query borrows its own connection. The pool opens connections on demand,
up to pool_size, and keeps them for reuse.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from productwise.config import get_logger, get_settings
from productwise.core.exceptions import DatabaseError

logger = get_logger(__name__)

CONNECTION_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Lazily grown pool of at most pool_size aiosqlite connections."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
        acquire_timeout: float = 30.0,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout
        self.acquire_timeout = acquire_timeout

        self._slots = asyncio.Semaphore(pool_size)
        self._idle: asyncio.LifoQueue[aiosqlite.Connection] = asyncio.LifoQueue()
        self._opened: list[aiosqlite.Connection] = []
        self._in_use = 0
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def opened(self) -> int:
        return len(self._opened)

    @property
    def in_use(self) -> int:
        return self._in_use

    async def initialize(self) -> None:
        """Create the database directory and open a first connection."""
        if self._initialized:
            return

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._idle.put_nowait(await self._open())
        self._initialized = True
        logger.info(
            "connection_pool_initialized",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in CONNECTION_PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row

        self._opened.append(conn)
        logger.debug("connection_opened", opened=len(self._opened))
        return conn

    async def _checkout(self) -> aiosqlite.Connection:
        try:
            await asyncio.wait_for(self._slots.acquire(), timeout=self.acquire_timeout)
        except TimeoutError as e:
            logger.warning(
                "connection_pool_exhausted",
                pool_size=self.pool_size,
                timeout_s=self.acquire_timeout,
            )
            raise DatabaseError(
                "acquire_connection",
                f"no connection available within {self.acquire_timeout}s",
            ) from e

        try:
            conn = self._idle.get_nowait() if not self._idle.empty() else await self._open()
        except BaseException:
            self._slots.release()
            raise

        self._in_use += 1
        return conn

    def _checkin(self, conn: aiosqlite.Connection) -> None:
        self._in_use -= 1
        if conn in self._opened:
            self._idle.put_nowait(conn)
        self._slots.release()

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection for the duration of the block.

        Waits up to acquire_timeout for a free slot, then raises
        DatabaseError.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self._initialized:
            await self.initialize()

        conn = await self._checkout()
        try:
            yield conn
        finally:
            self._checkin(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; commit on success, roll back on error."""
        async with self.acquire() as conn:
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def close(self) -> None:
        """Close every opened connection. The pool can be used again afterwards."""
        opened = len(self._opened)
        for conn in self._opened:
            await conn.close()
        self._opened.clear()
        self._idle = asyncio.LifoQueue()
        self._initialized = False
        logger.info("connection_pool_closed", connections=opened)


# Global connection pool
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the global connection pool."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
            acquire_timeout=storage.acquire_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a connection from the global pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a transactional connection from the global pool."""
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
