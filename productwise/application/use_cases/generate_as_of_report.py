"""Generate As-Of Report Use Case: opening, movements, adjustments, closing."""

from dataclasses import dataclass, field

from productwise.application.dto.requests import ReportRequest
from productwise.application.dto.responses import (
    AsOfReportResponse,
    AsOfRowResponse,
    AsOfTotalsResponse,
)
from productwise.core.entities.movement import AsOfRow
from productwise.core.services import ZERO, AsOfBalanceCalculator


@dataclass
class AsOfReportResult:
    rows: list[AsOfRow] = field(default_factory=list)
    movements: list[str] = field(default_factory=list)


class GenerateAsOfReportUseCase:
    """Compute running balances per product and warehouse."""

    def __init__(self, calculator: AsOfBalanceCalculator | None = None):
        self._calculator = calculator

    async def _get_calculator(self) -> AsOfBalanceCalculator:
        if self._calculator is None:
            from productwise.application.services import get_balance_calculator

            self._calculator = await get_balance_calculator()
        return self._calculator

    async def execute(self, request: ReportRequest) -> AsOfReportResult:
        calculator = await self._get_calculator()
        selection = request.to_selection()

        rows = await calculator.compute_as_of(selection)
        # Rows carry every requested category; the first row gives the order
        movements = list(rows[0].movement_sums) if rows else []
        return AsOfReportResult(rows=rows, movements=movements)

    def to_response(self, result: AsOfReportResult) -> AsOfReportResponse:
        """Convert result to API response."""
        opening = adjustments = inbound = outbound = closing = ZERO
        move_totals = {movement: ZERO for movement in result.movements}

        rows = []
        for row in result.rows:
            rows.append(
                AsOfRowResponse(
                    warehouse_id=row.warehouse_id,
                    product_id=row.product_id,
                    opening=float(row.opening),
                    adjustments=float(row.adjustments),
                    moves={m: float(q) for m, q in row.movement_sums.items()},
                    inbound=float(row.inbound),
                    outbound=float(row.outbound),
                    closing=float(row.closing),
                )
            )
            opening += row.opening
            adjustments += row.adjustments
            inbound += row.inbound
            outbound += row.outbound
            closing += row.closing
            for movement, quantity in row.movement_sums.items():
                move_totals[movement] = move_totals.get(movement, ZERO) + quantity

        # Totals are summed as Decimals and converted once
        totals = AsOfTotalsResponse(
            opening=float(opening),
            adjustments=float(adjustments),
            moves={m: float(q) for m, q in move_totals.items()},
            inbound=float(inbound),
            outbound=float(outbound),
            closing=float(closing),
        )
        return AsOfReportResponse(rows=rows, totals=totals)
