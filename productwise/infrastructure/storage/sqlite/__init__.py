"""SQLite storage implementations."""

from productwise.infrastructure.storage.sqlite.adjustment_store import SQLiteAdjustmentStore
from productwise.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from productwise.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from productwise.infrastructure.storage.sqlite.movement_store import SQLiteMovementStore

# Singleton instances
_movement_store: SQLiteMovementStore | None = None
_catalog_store: SQLiteCatalogStore | None = None
_adjustment_store: SQLiteAdjustmentStore | None = None


async def get_movement_store() -> SQLiteMovementStore:
    """Get singleton movement store instance."""
    global _movement_store
    if _movement_store is None:
        _movement_store = SQLiteMovementStore()
    return _movement_store


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


async def get_adjustment_store() -> SQLiteAdjustmentStore:
    """Get singleton adjustment store instance."""
    global _adjustment_store
    if _adjustment_store is None:
        _adjustment_store = SQLiteAdjustmentStore()
    return _adjustment_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteMovementStore",
    "SQLiteCatalogStore",
    "SQLiteAdjustmentStore",
    # Factory functions
    "get_movement_store",
    "get_catalog_store",
    "get_adjustment_store",
]
