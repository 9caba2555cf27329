"""Storage infrastructure implementations."""

from productwise.infrastructure.storage.sqlite import (
    SQLiteAdjustmentStore,
    SQLiteCatalogStore,
    SQLiteMovementStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    "SQLiteMovementStore",
    "SQLiteCatalogStore",
    "SQLiteAdjustmentStore",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
