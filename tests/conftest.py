"""Pytest configuration and shared fixtures."""

import asyncio
from collections.abc import Callable, Collection
from datetime import datetime
from decimal import Decimal

import pytest

from productwise.config import reset_settings
from productwise.core.entities import DateRange, MovementEvent, WarehouseColumn
from productwise.core.interfaces import IMovementStore


class InMemoryMovementStore(IMovementStore):
    """Movement store over a list of events, applying the same filters as SQL."""

    def __init__(
        self,
        events: list[MovementEvent] | None = None,
        failures: dict[str, Exception] | None = None,
        delay: float = 0.0,
    ):
        self.events = list(events or [])
        self.failures = failures or {}
        self.delay = delay
        self.calls: list[tuple[str, ...]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_movements(
        self,
        movement_types: Collection[str],
        product_ids: Collection[int],
        warehouse_column: WarehouseColumn,
        warehouse_ids: Collection[int] | None = None,
        range_start: datetime | None = None,
        range_end: datetime | None = None,
    ) -> list[MovementEvent]:
        self.calls.append(tuple(movement_types))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            for movement_type in movement_types:
                if movement_type in self.failures:
                    raise self.failures[movement_type]

            date_range = DateRange(start=range_start, end_exclusive=range_end)
            return [
                e
                for e in self.events
                if e.movement_type in movement_types
                and e.product_id in product_ids
                and (not warehouse_ids or e.warehouse_for(warehouse_column) in warehouse_ids)
                and date_range.contains(e.occurred_at)
            ]
        finally:
            self.in_flight -= 1


def _parse_instant(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are re-read from the environment in every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_event() -> Callable[..., MovementEvent]:
    """Factory for movement events; times are ISO strings in UTC."""
    counter = iter(range(1, 10_000))

    def _make(
        movement_type: str,
        quantity: str | int | Decimal,
        product_id: int = 1,
        source: int | None = None,
        dest: int | None = None,
        at: str = "2024-01-15T12:00:00Z",
    ) -> MovementEvent:
        return MovementEvent(
            id=next(counter),
            product_id=product_id,
            source_warehouse_id=source,
            dest_warehouse_id=dest,
            movement_type=movement_type,
            quantity=Decimal(str(quantity)),
            occurred_at=_parse_instant(at),
        )

    return _make


@pytest.fixture
def movement_store_factory() -> type[InMemoryMovementStore]:
    return InMemoryMovementStore
