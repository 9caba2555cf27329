"""
Application layer - Use cases, DTOs, and service factories.

Use cases are the only entry point for API handlers.
"""

from productwise.application.dto import (
    AsOfReportResponse,
    ErrorResponse,
    HealthResponse,
    LegacyReportResponse,
    ProductListResponse,
    ReportRequest,
    TabularReportResponse,
    WarehouseListResponse,
)
from productwise.application.services import (
    get_aggregation_engine,
    get_balance_calculator,
    get_export_service,
    reset_services,
)
from productwise.application.use_cases import (
    ExportReportUseCase,
    GenerateAsOfReportUseCase,
    GenerateReportUseCase,
    ListProductsUseCase,
    ListWarehousesUseCase,
)

__all__ = [
    # DTOs
    "ReportRequest",
    "LegacyReportResponse",
    "TabularReportResponse",
    "AsOfReportResponse",
    "ProductListResponse",
    "WarehouseListResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use cases
    "GenerateReportUseCase",
    "GenerateAsOfReportUseCase",
    "ExportReportUseCase",
    "ListProductsUseCase",
    "ListWarehousesUseCase",
    # Service factories
    "get_aggregation_engine",
    "get_balance_calculator",
    "get_export_service",
    "reset_services",
]
