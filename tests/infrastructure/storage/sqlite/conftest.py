"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest

import productwise.infrastructure.storage.sqlite.connection as conn_module
from productwise.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    mock.storage.acquire_timeout = 5.0
    return mock


@pytest.fixture
async def report_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated database behind the global pool, with a small catalog."""
    await initialize_database(temp_db_path, create_backup_before=False)

    async with aiosqlite.connect(temp_db_path) as conn:
        await conn.executemany(
            "INSERT INTO categories (id, name) VALUES (?, ?)",
            [(1, "Dairy"), (2, "Bakery")],
        )
        await conn.executemany(
            "INSERT INTO products (id, name, code, category_id) VALUES (?, ?, ?, ?)",
            [
                (1, "Milk", "6111001", 1),
                (2, "Butter", "6111002", 1),
                (3, "Bread", None, 2),
                (4, "Salt", "", None),
            ],
        )
        await conn.executemany(
            "INSERT INTO warehouses (id, display_name) VALUES (?, ?)",
            [(10, "Main"), (11, "Annex"), (12, "Annex")],
        )
        await conn.commit()

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()
