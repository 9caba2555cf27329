"""Tests for SQLite movement store."""

from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path

import aiosqlite
import pytest

from productwise.core.entities import MovementEvent, Selection, WarehouseColumn
from productwise.core.exceptions import DatabaseError, MovementQueryError
from productwise.core.services import AggregationEngine
from productwise.infrastructure.storage.sqlite.movement_store import SQLiteMovementStore


def event(movement_type: str, quantity: str, at: datetime, **kwargs) -> MovementEvent:
    return MovementEvent(
        product_id=kwargs.pop("product_id", 1),
        movement_type=movement_type,
        quantity=Decimal(quantity),
        occurred_at=at,
        **kwargs,
    )


@pytest.fixture
async def seeded_store(report_db: Path) -> SQLiteMovementStore:
    store = SQLiteMovementStore()
    for movement in [
        event("purchase", "10", datetime(2024, 1, 1, tzinfo=UTC), dest_warehouse_id=10),
        event("purchases", "5.25", datetime(2024, 1, 15, 8, tzinfo=UTC), dest_warehouse_id=10),
        event("purchase", "-2", datetime(2024, 1, 31, 23, 59, 59, tzinfo=UTC), dest_warehouse_id=11),
        event("purchase", "99", datetime(2024, 2, 1, tzinfo=UTC), dest_warehouse_id=10),
        event("sale", "3", datetime(2024, 1, 10, tzinfo=UTC), source_warehouse_id=10),
        event("sales", "4", datetime(2024, 1, 11, tzinfo=UTC), product_id=2, source_warehouse_id=10),
        event(
            "transfer",
            "6",
            datetime(2024, 1, 12, tzinfo=UTC),
            source_warehouse_id=11,
            dest_warehouse_id=10,
        ),
    ]:
        await store.add_movement(movement)
    return store


class TestSQLiteMovementStore:
    async def test_add_movement_assigns_id(self, report_db: Path):
        store = SQLiteMovementStore()
        created = await store.add_movement(
            event("sales", "1.5", datetime(2024, 1, 1, tzinfo=UTC), source_warehouse_id=10)
        )
        assert created.id is not None

        async with aiosqlite.connect(report_db) as conn:
            cursor = await conn.execute(
                "SELECT quantity, created_at FROM stock_movements WHERE id = ?", (created.id,)
            )
            quantity, created_at = await cursor.fetchone()
        assert quantity == "1.5"
        assert created_at == "2024-01-01T00:00:00.000000Z"

    async def test_matches_any_alias(self, seeded_store: SQLiteMovementStore):
        events = await seeded_store.fetch_movements(
            ["purchase", "purchases"], [1], WarehouseColumn.DEST
        )
        assert [e.quantity for e in events] == [
            Decimal("10"),
            Decimal("5.25"),
            Decimal("-2"),
            Decimal("99"),
        ]
        assert all(e.occurred_at.tzinfo is not None for e in events)

    async def test_half_open_range(self, seeded_store: SQLiteMovementStore):
        events = await seeded_store.fetch_movements(
            ["purchase", "purchases"],
            [1],
            WarehouseColumn.DEST,
            range_start=datetime(2024, 1, 1, tzinfo=UTC),
            range_end=datetime(2024, 2, 1, tzinfo=UTC),
        )
        assert sum(e.quantity for e in events) == Decimal("13.25")

    async def test_warehouse_filter_uses_column(self, seeded_store: SQLiteMovementStore):
        by_dest = await seeded_store.fetch_movements(
            ["transfer"], [1], WarehouseColumn.DEST, warehouse_ids=[10]
        )
        by_source = await seeded_store.fetch_movements(
            ["transfer"], [1], WarehouseColumn.SOURCE, warehouse_ids=[10]
        )
        assert len(by_dest) == 1
        assert by_dest[0].source_warehouse_id == 11
        assert by_source == []

    async def test_product_filter(self, seeded_store: SQLiteMovementStore):
        events = await seeded_store.fetch_movements(["sales", "sale"], [2], WarehouseColumn.SOURCE)
        assert [(e.product_id, e.quantity) for e in events] == [(2, Decimal("4"))]

    async def test_empty_filters_return_nothing(self, seeded_store: SQLiteMovementStore):
        assert await seeded_store.fetch_movements([], [1], WarehouseColumn.SOURCE) == []
        assert await seeded_store.fetch_movements(["sales"], [], WarehouseColumn.SOURCE) == []

    async def test_invalid_quantity_reads_as_zero(self, report_db: Path):
        async with aiosqlite.connect(report_db) as conn:
            await conn.execute(
                """
                INSERT INTO stock_movements (product_id, warehouse_id, movement_type, quantity, created_at)
                VALUES (1, 10, 'wastage', 'n/a', '2024-01-05T00:00:00.000000Z')
                """
            )
            await conn.commit()

        events = await SQLiteMovementStore().fetch_movements(
            ["wastage"], [1], WarehouseColumn.SOURCE
        )
        assert events[0].quantity == Decimal("0")

    async def test_query_error_is_wrapped(self, report_db: Path):
        async with aiosqlite.connect(report_db) as conn:
            await conn.execute("DROP TABLE stock_movements")
            await conn.commit()

        with pytest.raises(DatabaseError) as exc_info:
            await SQLiteMovementStore().fetch_movements(["sales"], [1], WarehouseColumn.SOURCE)

        assert "no such table" in exc_info.value.details["error"]

    async def test_report_surfaces_driver_message(self, report_db: Path):
        async with aiosqlite.connect(report_db) as conn:
            await conn.execute("DROP TABLE stock_movements")
            await conn.commit()
        engine = AggregationEngine(SQLiteMovementStore())

        with pytest.raises(MovementQueryError) as exc_info:
            await engine.aggregate(
                Selection(product_ids=[1], warehouse_ids=[10], movements=["sales"])
            )

        assert exc_info.value.message == "no such table: stock_movements"
        assert exc_info.value.movement == "sales"
