"""Data Transfer Objects for the API layer.

These are the only contracts between API handlers and use cases.
"""

from productwise.application.dto.requests import ReportRequest
from productwise.application.dto.responses import (
    AsOfReportResponse,
    AsOfRowResponse,
    AsOfTotalsResponse,
    ErrorResponse,
    HealthResponse,
    LegacyReportResponse,
    MovementOptionListResponse,
    MovementOptionResponse,
    ProductListResponse,
    ProductResponse,
    ProviderHealthResponse,
    ReportRowResponse,
    TabularReportResponse,
    WarehouseListResponse,
    WarehouseResponse,
)

__all__ = [
    # Requests
    "ReportRequest",
    # Reports
    "LegacyReportResponse",
    "ReportRowResponse",
    "TabularReportResponse",
    "AsOfRowResponse",
    "AsOfTotalsResponse",
    "AsOfReportResponse",
    # Catalog
    "ProductResponse",
    "ProductListResponse",
    "WarehouseResponse",
    "WarehouseListResponse",
    "MovementOptionResponse",
    "MovementOptionListResponse",
    # Health / errors
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
