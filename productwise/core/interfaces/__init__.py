"""Core interfaces (ports) for dependency injection."""

from productwise.core.interfaces.adjustment_store import IAdjustmentStore
from productwise.core.interfaces.catalog_store import ICatalogStore
from productwise.core.interfaces.movement_store import IMovementStore

__all__ = [
    "IMovementStore",
    "ICatalogStore",
    "IAdjustmentStore",
]
