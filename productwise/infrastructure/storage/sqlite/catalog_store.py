"""SQLite implementation of catalog lookups."""

from collections.abc import Collection

import aiosqlite

from productwise.config import get_logger
from productwise.core.entities.catalog import Product, Warehouse
from productwise.core.interfaces.catalog_store import ICatalogStore
from productwise.infrastructure.storage.sqlite.connection import get_connection

logger = get_logger(__name__)


class SQLiteCatalogStore(ICatalogStore):
    """Products, categories and warehouses."""

    async def list_products(self, limit: int = 1000, offset: int = 0) -> list[Product]:
        """List products with pagination."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT id, name, code, category_id FROM products
                ORDER BY id
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def get_products(self, product_ids: Collection[int]) -> dict[int, Product]:
        """Get products by id."""
        if not product_ids:
            return {}
        placeholders = ", ".join("?" for _ in product_ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT id, name, code, category_id FROM products WHERE id IN ({placeholders})",
                list(product_ids),
            )
            rows = await cursor.fetchall()
            return {row["id"]: self._row_to_product(row) for row in rows}

    async def list_warehouses(self) -> list[Warehouse]:
        """List all warehouses."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT id, display_name FROM warehouses ORDER BY display_name, id"
            )
            rows = await cursor.fetchall()
            return [Warehouse(id=row["id"], display_name=row["display_name"]) for row in rows]

    async def fetch_category_names(self, category_ids: Collection[int]) -> dict[int, str]:
        """Map category ids to names."""
        ids = [category_id for category_id in category_ids if category_id is not None]
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT id, name FROM categories WHERE id IN ({placeholders})",
                ids,
            )
            rows = await cursor.fetchall()
            return {row["id"]: row["name"] for row in rows}

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            code=row["code"] or None,
            category_id=row["category_id"],
        )
