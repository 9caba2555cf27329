"""Report file exporters."""

from productwise.core.services.report_export import IReportExporter
from productwise.infrastructure.export.csv_exporter import CSVReportExporter, format_quantity
from productwise.infrastructure.export.html_exporter import HTMLReportExporter

EXPORTERS: dict[str, type[IReportExporter]] = {
    "csv": CSVReportExporter,
    "xls": HTMLReportExporter,
}


def get_exporter(format: str) -> IReportExporter:
    """Exporter for a format name; raises KeyError when unsupported."""
    return EXPORTERS[format]()


__all__ = [
    "CSVReportExporter",
    "HTMLReportExporter",
    "EXPORTERS",
    "get_exporter",
    "format_quantity",
]
