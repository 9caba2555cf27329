"""
Movement aggregation engine.

Fans out one query per requested movement category and folds the returned
events into a sparse (product, warehouse, movement) -> quantity map.

Pure service: the movement store is injected via constructor.
"""

import asyncio
from collections.abc import Iterable, Sequence
from decimal import Decimal

from productwise.config import get_logger
from productwise.core.entities.movement import AggregationCell, MovementEvent, Selection
from productwise.core.entities.period import DateRange
from productwise.core.exceptions import (
    DatabaseError,
    EmptySelectionError,
    MovementQueryError,
    UnknownMovementError,
)
from productwise.core.interfaces.movement_store import IMovementStore
from productwise.core.services.date_range import normalize
from productwise.core.services.movement_classifier import Classification, classify

logger = get_logger(__name__)

CellKey = tuple[int, int, str]

ZERO = Decimal("0")


class CellMap:
    """Sparse map of (product_id, warehouse_id, movement) to summed quantity."""

    def __init__(self) -> None:
        self._cells: dict[CellKey, Decimal] = {}

    def add(self, product_id: int, warehouse_id: int, movement: str, quantity: Decimal) -> None:
        key = (product_id, warehouse_id, movement)
        self._cells[key] = self._cells.get(key, ZERO) + quantity

    def get(self, product_id: int, warehouse_id: int, movement: str) -> Decimal:
        return self._cells.get((product_id, warehouse_id, movement), ZERO)

    def merge(self, other: "CellMap") -> "CellMap":
        """Return a new map holding the sums of both maps."""
        merged = CellMap()
        for source in (self, other):
            for (product_id, warehouse_id, movement), quantity in source._cells.items():
                merged.add(product_id, warehouse_id, movement, quantity)
        return merged

    def cells(self) -> list[AggregationCell]:
        return [
            AggregationCell(
                product_id=product_id,
                warehouse_id=warehouse_id,
                movement=movement,
                quantity=quantity,
            )
            for (product_id, warehouse_id, movement), quantity in sorted(self._cells.items())
        ]

    def by_warehouse(self) -> dict[int, dict[str, Decimal]]:
        """Legacy shape: warehouse -> movement -> quantity, summed over products."""
        result: dict[int, dict[str, Decimal]] = {}
        for (_, warehouse_id, movement), quantity in self._cells.items():
            moves = result.setdefault(warehouse_id, {})
            moves[movement] = moves.get(movement, ZERO) + quantity
        return result

    def totals(self) -> dict[str, Decimal]:
        """Movement -> quantity summed over every cell."""
        result: dict[str, Decimal] = {}
        for (_, _, movement), quantity in self._cells.items():
            result[movement] = result.get(movement, ZERO) + quantity
        return result

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellMap):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"CellMap({self._cells!r})"


def fold_events(
    cell_map: CellMap,
    classification: Classification,
    events: Iterable[MovementEvent],
) -> CellMap:
    """Sum events into cell_map under the classification's grouping column."""
    for event in events:
        warehouse_id = event.warehouse_for(classification.column)
        if warehouse_id is None:
            continue
        quantity = abs(event.quantity) if classification.absolute else event.quantity
        cell_map.add(event.product_id, warehouse_id, classification.category, quantity)
    return cell_map


def _underlying_message(exc: Exception) -> str:
    """Driver error text, without the store's operation prefix."""
    if isinstance(exc, DatabaseError):
        return exc.details.get("error") or exc.message
    return str(exc)


def validate_selection(selection: Selection) -> None:
    """Raise EmptySelectionError for the first empty required list."""
    if not selection.product_ids:
        raise EmptySelectionError("productIds")
    if not selection.warehouse_ids:
        raise EmptySelectionError("warehouseIds")
    if not selection.movements:
        raise EmptySelectionError("movements")


class AggregationEngine:
    """
    Aggregates stock movements for a report selection.

    Failure policy: if any category query fails, the first failing
    category in request order is reported and no cells are returned.
    """

    def __init__(
        self,
        movement_store: IMovementStore,
        strict: bool = False,
        max_concurrency: int = 4,
    ) -> None:
        self._movement_store = movement_store
        self._strict = strict
        self._max_concurrency = max(1, max_concurrency)

    def classify_movements(self, movements: Sequence[str]) -> list[Classification]:
        """Classify requested names, deduplicated by canonical category."""
        seen: set[str] = set()
        result = []
        for name in movements:
            classification = classify(name)
            if self._strict and not classification.known:
                raise UnknownMovementError(name)
            if classification.category in seen:
                continue
            seen.add(classification.category)
            result.append(classification)
        return result

    async def fetch_categories(
        self,
        classifications: Sequence[Classification],
        product_ids: Sequence[int],
        warehouse_ids: Sequence[int],
        date_range: DateRange,
    ) -> list[tuple[Classification, list[MovementEvent]]]:
        """Run one movement query per category concurrently."""
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def run(classification: Classification) -> list[MovementEvent]:
            async with semaphore:
                return await self._movement_store.fetch_movements(
                    movement_types=classification.aliases,
                    product_ids=product_ids,
                    warehouse_column=classification.column,
                    warehouse_ids=warehouse_ids or None,
                    range_start=date_range.start,
                    range_end=date_range.end_exclusive,
                )

        results = await asyncio.gather(
            *(run(classification) for classification in classifications),
            return_exceptions=True,
        )

        fetched = []
        for classification, result in zip(classifications, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                error = _underlying_message(result)
                logger.error(
                    "movement_query_failed",
                    movement=classification.category,
                    error=error,
                )
                raise MovementQueryError(classification.category, error) from result
            fetched.append((classification, result))
        return fetched

    async def aggregate_cells(self, selection: Selection) -> CellMap:
        """Validate the selection and build the cell map."""
        validate_selection(selection)
        classifications = self.classify_movements(selection.movements)
        date_range = normalize(selection.from_date, selection.to_date)

        logger.info(
            "report_aggregation_started",
            products=len(selection.product_ids),
            warehouses=len(selection.warehouse_ids),
            movements=[c.category for c in classifications],
            range_start=date_range.start.isoformat() if date_range.start else None,
            range_end=date_range.end_exclusive.isoformat() if date_range.end_exclusive else None,
        )

        fetched = await self.fetch_categories(
            classifications,
            selection.product_ids,
            selection.warehouse_ids,
            date_range,
        )

        cell_map = CellMap()
        for classification, events in fetched:
            fold_events(cell_map, classification, events)

        logger.info("report_aggregation_complete", cells=len(cell_map))
        return cell_map

    async def aggregate(self, selection: Selection) -> list[AggregationCell]:
        """Aggregate the selection into cells."""
        cell_map = await self.aggregate_cells(selection)
        return cell_map.cells()
