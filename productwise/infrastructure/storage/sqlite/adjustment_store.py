"""SQLite implementation of manual stock adjustments."""

from collections.abc import Collection
from decimal import Decimal

from productwise.config import get_logger
from productwise.core.entities.catalog import StockAdjustment
from productwise.core.entities.period import DateRange
from productwise.core.interfaces.adjustment_store import IAdjustmentStore
from productwise.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from productwise.infrastructure.storage.sqlite.timestamps import to_db_timestamp

logger = get_logger(__name__)


class SQLiteAdjustmentStore(IAdjustmentStore):
    """Reads and records rows of the stock_adjustments table."""

    async def fetch_stock_adjustments(
        self,
        product_ids: Collection[int],
        warehouse_ids: Collection[int],
        date_range: DateRange,
    ) -> dict[tuple[int, int], Decimal]:
        """Sum adjustments per (product, warehouse) within the range."""
        if not product_ids or not warehouse_ids:
            return {}

        clauses = [
            f"product_id IN ({', '.join('?' for _ in product_ids)})",
            f"warehouse_id IN ({', '.join('?' for _ in warehouse_ids)})",
        ]
        params: list = [*product_ids, *warehouse_ids]
        if date_range.start is not None:
            clauses.append("adjusted_at >= ?")
            params.append(to_db_timestamp(date_range.start))
        if date_range.end_exclusive is not None:
            clauses.append("adjusted_at < ?")
            params.append(to_db_timestamp(date_range.end_exclusive))

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT product_id, warehouse_id, quantity FROM stock_adjustments
                WHERE {" AND ".join(clauses)}
                """,
                params,
            )
            rows = await cursor.fetchall()

        # Summed in Python so decimal text is never rounded through REAL
        totals: dict[tuple[int, int], Decimal] = {}
        for row in rows:
            key = (row["product_id"], row["warehouse_id"])
            totals[key] = totals.get(key, Decimal("0")) + Decimal(str(row["quantity"]))
        return totals

    async def add_adjustment(self, adjustment: StockAdjustment) -> StockAdjustment:
        """Record a manual adjustment."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO stock_adjustments (
                    product_id, warehouse_id, quantity, adjusted_at, reason
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    adjustment.product_id,
                    adjustment.warehouse_id,
                    str(adjustment.quantity),
                    to_db_timestamp(adjustment.adjusted_at),
                    adjustment.reason,
                ),
            )
            logger.info(
                "stock_adjustment_recorded",
                adjustment_id=cursor.lastrowid,
                product_id=adjustment.product_id,
                warehouse_id=adjustment.warehouse_id,
            )
            return adjustment.model_copy(update={"id": cursor.lastrowid})
