"""
Movement report endpoints.

Aggregated movement sums, as-of balances and file exports.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from productwise.api.dependencies import (
    get_export_report_use_case,
    get_generate_as_of_report_use_case,
    get_generate_report_use_case,
)
from productwise.application.dto.requests import ReportRequest
from productwise.application.dto.responses import (
    AsOfReportResponse,
    ErrorResponse,
    LegacyReportResponse,
    TabularReportResponse,
)
from productwise.application.use_cases import (
    ExportReportUseCase,
    GenerateAsOfReportUseCase,
    GenerateReportUseCase,
)

router = APIRouter(prefix="/api/report", tags=["report"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Empty or invalid selection"},
    500: {"model": ErrorResponse, "description": "A movement query failed"},
}


@router.post(
    "",
    response_model=LegacyReportResponse | TabularReportResponse,
    responses=ERROR_RESPONSES,
)
async def generate_report(
    request: ReportRequest,
    layout: Literal["legacy", "tabular"] = Query(
        default="legacy",
        description="legacy: byWarehouse map; tabular: rows per product and warehouse",
    ),
    use_case: GenerateReportUseCase = Depends(get_generate_report_use_case),
) -> LegacyReportResponse | TabularReportResponse:
    """
    Sum stock movements per warehouse and movement type.

    Fails as a whole when any movement type cannot be queried.
    """
    result = await use_case.execute(request)
    if layout == "tabular":
        return use_case.to_tabular_response(result)
    return use_case.to_legacy_response(result)


@router.post("/as-of", response_model=AsOfReportResponse, responses=ERROR_RESPONSES)
async def generate_as_of_report(
    request: ReportRequest,
    use_case: GenerateAsOfReportUseCase = Depends(get_generate_as_of_report_use_case),
) -> AsOfReportResponse:
    """
    Opening stock, movements, adjustments and closing stock per product
    and warehouse.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post("/export", responses=ERROR_RESPONSES)
async def export_report(
    request: ReportRequest,
    format: Literal["csv", "xls"] = Query(default="csv", description="csv or xls"),
    use_case: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response:
    """Download the report with one table per product."""
    result = await use_case.execute(request, format=format)
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
