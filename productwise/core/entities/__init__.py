"""Core domain entities."""

from productwise.core.entities.catalog import (
    Category,
    Product,
    StockAdjustment,
    Warehouse,
)
from productwise.core.entities.movement import (
    AggregationCell,
    AsOfRow,
    MovementCategory,
    MovementEvent,
    Selection,
    WarehouseColumn,
)
from productwise.core.entities.period import DateRange

__all__ = [
    # Movement entities
    "MovementCategory",
    "MovementEvent",
    "WarehouseColumn",
    "Selection",
    "AggregationCell",
    "AsOfRow",
    "DateRange",
    # Catalog entities
    "Category",
    "Product",
    "Warehouse",
    "StockAdjustment",
]
