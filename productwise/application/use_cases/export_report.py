"""Export Report Use Case: render a report as a downloadable file."""

from productwise.application.dto.requests import ReportRequest
from productwise.config import get_logger
from productwise.core.exceptions import ValidationError
from productwise.core.services import ExportResult, IReportExporter, ReportExportService

logger = get_logger(__name__)


class ExportReportUseCase:
    """Aggregate a selection and render it as CSV or an Excel-readable table."""

    def __init__(
        self,
        export_service: ReportExportService | None = None,
        exporters: dict[str, type[IReportExporter]] | None = None,
    ):
        self._export_service = export_service
        self._exporters = exporters

    async def _get_export_service(self) -> ReportExportService:
        if self._export_service is None:
            from productwise.application.services import get_export_service

            self._export_service = await get_export_service()
        return self._export_service

    def _get_exporter(self, format: str) -> IReportExporter:
        if self._exporters is None:
            from productwise.infrastructure.export import EXPORTERS

            self._exporters = EXPORTERS
        exporter_cls = self._exporters.get(format)
        if exporter_cls is None:
            raise ValidationError(
                field="format",
                message=f"Unsupported export format: {format}",
                value=format,
            )
        return exporter_cls()

    async def execute(self, request: ReportRequest, format: str = "csv") -> ExportResult:
        """Execute the export use case."""
        exporter = self._get_exporter(format)
        service = await self._get_export_service()

        logger.info("report_export_started", format=format)
        return await service.export(request.to_selection(), exporter)
