"""Tests for ExportReportUseCase."""

from unittest.mock import AsyncMock

import pytest

from productwise.application.dto.requests import ReportRequest
from productwise.application.use_cases import ExportReportUseCase
from productwise.core.exceptions import ValidationError
from productwise.core.services import ExportResult, ReportExportService
from productwise.infrastructure.export import CSVReportExporter, HTMLReportExporter


@pytest.fixture
def export_service() -> AsyncMock:
    service = AsyncMock(spec=ReportExportService)
    service.export.return_value = ExportResult(
        content=b"a,b\n", media_type="text/csv", filename="movement_report.csv"
    )
    return service


@pytest.fixture
def report_request() -> ReportRequest:
    return ReportRequest(product_ids=[1], warehouse_ids=[10], movements=["sales"])


class TestExportReportUseCase:
    async def test_csv(self, export_service, report_request):
        use_case = ExportReportUseCase(export_service=export_service)

        result = await use_case.execute(report_request, format="csv")

        assert result.filename == "movement_report.csv"
        selection, exporter = export_service.export.call_args.args
        assert selection.product_ids == [1]
        assert isinstance(exporter, CSVReportExporter)

    async def test_xls_uses_html_exporter(self, export_service, report_request):
        use_case = ExportReportUseCase(export_service=export_service)

        await use_case.execute(report_request, format="xls")

        _, exporter = export_service.export.call_args.args
        assert isinstance(exporter, HTMLReportExporter)

    async def test_unsupported_format(self, export_service, report_request):
        use_case = ExportReportUseCase(export_service=export_service)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(report_request, format="pdf")

        assert exc_info.value.field == "format"
        export_service.export.assert_not_called()
