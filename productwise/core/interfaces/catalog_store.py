"""Abstract interface for the product/category/warehouse catalog."""

from abc import ABC, abstractmethod
from collections.abc import Collection

from productwise.core.entities.catalog import Product, Warehouse


class ICatalogStore(ABC):
    """Interface for catalog lookups."""

    @abstractmethod
    async def list_products(self, limit: int = 1000, offset: int = 0) -> list[Product]:
        """List products ordered by id, one page at a time."""
        pass

    @abstractmethod
    async def get_products(self, product_ids: Collection[int]) -> dict[int, Product]:
        """Get products by id. Missing ids are absent from the result."""
        pass

    @abstractmethod
    async def list_warehouses(self) -> list[Warehouse]:
        """List all warehouses ordered by display name."""
        pass

    @abstractmethod
    async def fetch_category_names(self, category_ids: Collection[int]) -> dict[int, str]:
        """Map category ids to display names."""
        pass
