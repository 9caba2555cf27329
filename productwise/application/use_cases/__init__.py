"""Application use cases."""

from productwise.application.use_cases.export_report import ExportReportUseCase
from productwise.application.use_cases.generate_as_of_report import (
    AsOfReportResult,
    GenerateAsOfReportUseCase,
)
from productwise.application.use_cases.generate_report import GenerateReportUseCase, ReportResult
from productwise.application.use_cases.list_catalog import (
    ListProductsUseCase,
    ListWarehousesUseCase,
    ProductListing,
    list_movement_options,
    matches_prefix,
    normalize_search,
)

__all__ = [
    "GenerateReportUseCase",
    "ReportResult",
    "GenerateAsOfReportUseCase",
    "AsOfReportResult",
    "ExportReportUseCase",
    "ListProductsUseCase",
    "ListWarehousesUseCase",
    "ProductListing",
    "list_movement_options",
    "matches_prefix",
    "normalize_search",
]
