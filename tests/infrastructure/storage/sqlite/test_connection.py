"""Unit tests for SQLite connection pool."""

import asyncio
from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

import productwise.infrastructure.storage.sqlite.connection as conn_module
from productwise.core.exceptions import DatabaseError
from productwise.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)


class TestConnectionPool:
    """Tests for ConnectionPool."""

    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool.acquire_timeout == 30.0
        assert not pool.initialized
        assert pool.opened == 0

    async def test_initialize_opens_one_connection(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "test.db"
        pool = ConnectionPool(db_path, pool_size=3)

        await pool.initialize()
        await pool.initialize()

        assert db_path.parent.exists()
        assert pool.initialized
        assert pool.opened == 1
        await pool.close()

    async def test_connection_pragmas(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1, busy_timeout=1234)

        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA journal_mode")
            assert (await cursor.fetchone())[0].lower() == "wal"
            cursor = await conn.execute("PRAGMA busy_timeout")
            assert (await cursor.fetchone())[0] == 1234
            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1
            assert conn.row_factory is aiosqlite.Row

        await pool.close()

    async def test_sequential_use_reuses_connection(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=4)

        async with pool.acquire() as first:
            pass
        async with pool.acquire() as second:
            pass

        assert first is second
        assert pool.opened == 1
        await pool.close()

    async def test_grows_up_to_pool_size_under_concurrency(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=3)
        peak = 0

        async def query() -> None:
            nonlocal peak
            async with pool.acquire() as conn:
                peak = max(peak, pool.in_use)
                await asyncio.sleep(0.02)
                await conn.execute("SELECT 1")

        await asyncio.gather(*(query() for _ in range(6)))

        assert peak == 3
        assert pool.opened == 3
        assert pool.in_use == 0
        await pool.close()

    async def test_acquire_returns_connection_on_error(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)

        with pytest.raises(ValueError):
            async with pool.acquire():
                raise ValueError("boom")

        assert pool.in_use == 0
        async with pool.acquire() as conn:
            assert conn is not None
        await pool.close()

    async def test_acquire_times_out_when_exhausted(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1, acquire_timeout=0.05)

        async with pool.acquire():
            with pytest.raises(DatabaseError) as exc_info:
                async with pool.acquire():
                    pass

        assert exc_info.value.details["operation"] == "acquire_connection"
        assert pool.in_use == 0
        await pool.close()

    async def test_transaction_rolls_back_on_error(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        async with pool.transaction() as conn:
            await conn.execute("CREATE TABLE t (x INTEGER)")

        with pytest.raises(RuntimeError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t VALUES (1)")
                raise RuntimeError("abort")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 0
        await pool.close()

    async def test_close_allows_reuse(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2)
        await pool.initialize()
        await pool.close()

        assert not pool.initialized
        assert pool.opened == 0

        async with pool.acquire() as conn:
            assert conn is not None
        assert pool.opened == 1
        await pool.close()


class TestGlobalPool:
    """Tests for the module-level pool helpers."""

    async def test_get_pool_is_singleton(self, mock_settings):
        conn_module._pool = None

        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            try:
                pool1 = await get_pool()
                pool2 = await get_pool()
                assert pool1 is pool2
                assert pool1.db_path == mock_settings.storage.db_path
                assert pool1.pool_size == 2
                assert pool1.acquire_timeout == 5.0
            finally:
                await close_pool()

        assert conn_module._pool is None

    async def test_close_pool_safe_when_none(self):
        conn_module._pool = None
        await close_pool()

    async def test_get_transaction_commits(self, mock_settings):
        conn_module._pool = None

        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            try:
                async with get_transaction() as conn:
                    await conn.execute("CREATE TABLE t (x INTEGER)")
                    await conn.execute("INSERT INTO t VALUES (7)")

                async with get_connection() as conn:
                    cursor = await conn.execute("SELECT x FROM t")
                    row = await cursor.fetchone()
                    assert row["x"] == 7
            finally:
                await close_pool()
