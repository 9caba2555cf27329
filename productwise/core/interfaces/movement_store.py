"""Abstract interface for reading stock movements."""

from abc import ABC, abstractmethod
from collections.abc import Collection
from datetime import datetime

from productwise.core.entities.movement import MovementEvent, WarehouseColumn


class IMovementStore(ABC):
    """Read access to the immutable stock movement log."""

    @abstractmethod
    async def fetch_movements(
        self,
        movement_types: Collection[str],
        product_ids: Collection[int],
        warehouse_column: WarehouseColumn,
        warehouse_ids: Collection[int] | None = None,
        range_start: datetime | None = None,
        range_end: datetime | None = None,
    ) -> list[MovementEvent]:
        """
        Fetch movements matching the given filters.

        Args:
            movement_types: Stored movement_type values to match.
            product_ids: Products to include.
            warehouse_column: Column that warehouse_ids filters on.
            warehouse_ids: Warehouses to include (no filter when None/empty).
            range_start: Inclusive lower bound on occurred_at.
            range_end: Exclusive upper bound on occurred_at.
        """
        pass
