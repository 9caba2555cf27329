"""Generate Report Use Case: movement sums for a selection."""

from dataclasses import dataclass, field

from productwise.application.dto.requests import ReportRequest
from productwise.application.dto.responses import (
    LegacyReportResponse,
    ReportRowResponse,
    TabularReportResponse,
)
from productwise.config import get_logger
from productwise.core.entities.movement import Selection
from productwise.core.services import ZERO, AggregationEngine, CellMap

logger = get_logger(__name__)


@dataclass
class ReportResult:
    """Aggregated cells plus the canonical movements that were requested."""

    selection: Selection
    movements: list[str]
    cells: CellMap = field(default_factory=CellMap)


class GenerateReportUseCase:
    """Aggregate stock movements and shape them for the report endpoint."""

    def __init__(self, engine: AggregationEngine | None = None):
        self._engine = engine

    async def _get_engine(self) -> AggregationEngine:
        if self._engine is None:
            from productwise.application.services import get_aggregation_engine

            self._engine = await get_aggregation_engine()
        return self._engine

    async def execute(self, request: ReportRequest) -> ReportResult:
        """Execute the report use case."""
        engine = await self._get_engine()
        selection = request.to_selection()

        cells = await engine.aggregate_cells(selection)
        movements = [c.category for c in engine.classify_movements(selection.movements)]

        return ReportResult(selection=selection, movements=movements, cells=cells)

    def to_legacy_response(self, result: ReportResult) -> LegacyReportResponse:
        """Sparse warehouse -> movement map; warehouses without data are absent."""
        return LegacyReportResponse(
            by_warehouse={
                str(warehouse_id): {movement: float(qty) for movement, qty in moves.items()}
                for warehouse_id, moves in result.cells.by_warehouse().items()
            }
        )

    def to_tabular_response(self, result: ReportResult) -> TabularReportResponse:
        """One row per product x warehouse in request order, zero-filled."""
        cells = result.cells
        rows = [
            ReportRowResponse(
                warehouse_id=warehouse_id,
                product_id=product_id,
                moves={
                    movement: float(cells.get(product_id, warehouse_id, movement))
                    for movement in result.movements
                },
            )
            for product_id in result.selection.product_ids
            for warehouse_id in result.selection.warehouse_ids
        ]
        totals = cells.totals()
        return TabularReportResponse(
            rows=rows,
            totals={movement: float(totals.get(movement, ZERO)) for movement in result.movements},
        )
