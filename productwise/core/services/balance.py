"""
As-of balance calculator.

Builds running balances per (product, warehouse):
opening stock before the range, in-range movement sums, manual
adjustments, and the resulting closing figure.
"""

import asyncio
from collections.abc import Sequence
from decimal import Decimal

from productwise.config import get_logger
from productwise.core.entities.movement import AsOfRow, Selection
from productwise.core.entities.period import DateRange
from productwise.core.interfaces.adjustment_store import IAdjustmentStore
from productwise.core.services.aggregation import (
    ZERO,
    AggregationEngine,
    validate_selection,
)
from productwise.core.services.date_range import normalize
from productwise.core.services.movement_classifier import (
    INBOUND,
    all_categories,
    signed_quantity,
)

logger = get_logger(__name__)

PairKey = tuple[int, int]


class AsOfBalanceCalculator:
    """
    Computes as-of rows for a selection.

    Opening balances always cover every known movement category, so the
    closing figure matches true on-hand stock even when the in-range
    columns are restricted to a subset of categories.
    """

    def __init__(
        self,
        engine: AggregationEngine,
        adjustment_store: IAdjustmentStore | None = None,
    ) -> None:
        self._engine = engine
        self._adjustment_store = adjustment_store

    async def _signed_totals(
        self,
        product_ids: Sequence[int],
        warehouse_ids: Sequence[int],
        date_range: DateRange,
    ) -> dict[PairKey, Decimal]:
        """Net signed quantity per pair across all known categories."""
        fetched = await self._engine.fetch_categories(
            all_categories(), product_ids, warehouse_ids, date_range
        )
        totals: dict[PairKey, Decimal] = {}
        for classification, events in fetched:
            for event in events:
                warehouse_id = event.warehouse_for(classification.column)
                if warehouse_id is None:
                    continue
                key = (event.product_id, warehouse_id)
                totals[key] = totals.get(key, ZERO) + signed_quantity(
                    classification, event.quantity
                )
        return totals

    async def _opening(
        self, selection: Selection, date_range: DateRange
    ) -> dict[PairKey, Decimal]:
        if date_range.start is None:
            return {}
        return await self._signed_totals(
            selection.product_ids,
            selection.warehouse_ids,
            DateRange(end_exclusive=date_range.start),
        )

    async def _adjustments(
        self, selection: Selection, date_range: DateRange
    ) -> dict[PairKey, Decimal]:
        """Adjustments degrade to zero when the source is missing or failing."""
        if self._adjustment_store is None:
            logger.warning("adjustments_unavailable", reason="no adjustment store configured")
            return {}
        try:
            return await self._adjustment_store.fetch_stock_adjustments(
                selection.product_ids, selection.warehouse_ids, date_range
            )
        except Exception as e:
            logger.warning("adjustments_unavailable", error=str(e))
            return {}

    async def compute_as_of(self, selection: Selection) -> list[AsOfRow]:
        """One row per selected product x warehouse, in request order."""
        validate_selection(selection)
        classifications = self._engine.classify_movements(selection.movements)
        date_range = normalize(selection.from_date, selection.to_date)

        opening, in_range, adjustments = await asyncio.gather(
            self._opening(selection, date_range),
            self._engine.aggregate_cells(selection),
            self._adjustments(selection, date_range),
        )

        rows = []
        for product_id in selection.product_ids:
            for warehouse_id in selection.warehouse_ids:
                sums = {
                    c.category: in_range.get(product_id, warehouse_id, c.category)
                    for c in classifications
                }
                inbound = sum(
                    (sums[c.category] for c in classifications if c.sign == INBOUND), ZERO
                )
                outbound = sum(
                    (sums[c.category] for c in classifications if c.sign != INBOUND), ZERO
                )
                rows.append(
                    AsOfRow(
                        product_id=product_id,
                        warehouse_id=warehouse_id,
                        opening=opening.get((product_id, warehouse_id), ZERO),
                        adjustments=adjustments.get((product_id, warehouse_id), ZERO),
                        movement_sums=sums,
                        inbound=inbound,
                        outbound=outbound,
                    )
                )

        logger.info("as_of_report_complete", rows=len(rows))
        return rows

    async def balance_as_of(self, selection: Selection) -> dict[PairKey, Decimal]:
        """
        On-hand balance at the end of the range, computed from full history.

        Every pair of the selection is present. Used to reconcile as-of rows.
        """
        validate_selection(selection)
        date_range = normalize(selection.from_date, selection.to_date)
        totals, adjustments = await asyncio.gather(
            self._signed_totals(
                selection.product_ids,
                selection.warehouse_ids,
                DateRange(end_exclusive=date_range.end_exclusive),
            ),
            self._adjustments(selection, date_range),
        )
        return {
            (product_id, warehouse_id): totals.get((product_id, warehouse_id), ZERO)
            + adjustments.get((product_id, warehouse_id), ZERO)
            for product_id in selection.product_ids
            for warehouse_id in selection.warehouse_ids
        }
