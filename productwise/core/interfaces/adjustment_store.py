"""Abstract interface for manual stock adjustments."""

from abc import ABC, abstractmethod
from collections.abc import Collection
from decimal import Decimal

from productwise.core.entities.period import DateRange


class IAdjustmentStore(ABC):
    """Source of manual stock corrections."""

    @abstractmethod
    async def fetch_stock_adjustments(
        self,
        product_ids: Collection[int],
        warehouse_ids: Collection[int],
        date_range: DateRange,
    ) -> dict[tuple[int, int], Decimal]:
        """Sum adjustments per (product_id, warehouse_id) within the range."""
        pass
