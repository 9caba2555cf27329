"""SQLite implementation of the stock movement log."""

from collections.abc import Collection
from datetime import datetime
from decimal import Decimal, InvalidOperation

import aiosqlite

from productwise.config import get_logger
from productwise.core.entities.movement import MovementEvent, WarehouseColumn
from productwise.core.exceptions import DatabaseError
from productwise.core.interfaces.movement_store import IMovementStore
from productwise.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from productwise.infrastructure.storage.sqlite.timestamps import (
    from_db_timestamp,
    to_db_timestamp,
)

logger = get_logger(__name__)

# Grouping column -> physical column; never interpolate caller input
WAREHOUSE_COLUMNS: dict[WarehouseColumn, str] = {
    WarehouseColumn.SOURCE: "warehouse_id",
    WarehouseColumn.DEST: "warehouse_dest_id",
}


def _placeholders(values: Collection) -> str:
    return ", ".join("?" for _ in values)


class SQLiteMovementStore(IMovementStore):
    """Reads movements from the stock_movements table."""

    async def fetch_movements(
        self,
        movement_types: Collection[str],
        product_ids: Collection[int],
        warehouse_column: WarehouseColumn,
        warehouse_ids: Collection[int] | None = None,
        range_start: datetime | None = None,
        range_end: datetime | None = None,
    ) -> list[MovementEvent]:
        """Fetch movements matching all given filters, oldest first."""
        if not movement_types or not product_ids:
            return []

        column = WAREHOUSE_COLUMNS[warehouse_column]
        clauses = [
            f"movement_type IN ({_placeholders(movement_types)})",
            f"product_id IN ({_placeholders(product_ids)})",
        ]
        params: list = [*movement_types, *product_ids]

        if warehouse_ids:
            clauses.append(f"{column} IN ({_placeholders(warehouse_ids)})")
            params.extend(warehouse_ids)
        if range_start is not None:
            clauses.append("created_at >= ?")
            params.append(to_db_timestamp(range_start))
        if range_end is not None:
            clauses.append("created_at < ?")
            params.append(to_db_timestamp(range_end))

        sql = f"""
            SELECT id, product_id, warehouse_id, warehouse_dest_id,
                   movement_type, quantity, created_at
            FROM stock_movements
            WHERE {" AND ".join(clauses)}
            ORDER BY created_at, id
        """

        try:
            async with get_connection() as conn:
                cursor = await conn.execute(sql, params)
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise DatabaseError("fetch_movements", str(e)) from e

        logger.debug(
            "movements_fetched",
            movement_types=list(movement_types),
            column=column,
            rows=len(rows),
        )
        return [self._row_to_event(row) for row in rows]

    async def add_movement(self, event: MovementEvent) -> MovementEvent:
        """Append a movement. The report path never writes; used for seeding."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO stock_movements (
                    product_id, warehouse_id, warehouse_dest_id,
                    movement_type, quantity, created_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    event.product_id,
                    event.source_warehouse_id,
                    event.dest_warehouse_id,
                    event.movement_type,
                    str(event.quantity),
                    to_db_timestamp(event.occurred_at),
                ),
            )
            logger.info(
                "stock_movement_recorded",
                movement_id=cursor.lastrowid,
                type=event.movement_type,
                qty=str(event.quantity),
            )
            return event.model_copy(update={"id": cursor.lastrowid})

    @staticmethod
    def _row_to_event(row: aiosqlite.Row) -> MovementEvent:
        """Convert a database row to a MovementEvent."""
        try:
            quantity = Decimal(str(row["quantity"] if row["quantity"] is not None else 0))
        except InvalidOperation:
            logger.warning("invalid_movement_quantity", movement_id=row["id"])
            quantity = Decimal("0")

        return MovementEvent(
            id=row["id"],
            product_id=row["product_id"],
            source_warehouse_id=row["warehouse_id"],
            dest_warehouse_id=row["warehouse_dest_id"],
            movement_type=row["movement_type"],
            quantity=quantity,
            occurred_at=from_db_timestamp(row["created_at"]),
        )
