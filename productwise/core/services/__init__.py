"""
Core business logic services.

Layer-pure services that depend only on:
- productwise/core/entities/*
- productwise/core/interfaces/*
- productwise/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from productwise.core.services.aggregation import (
    ZERO,
    AggregationEngine,
    CellMap,
    fold_events,
    validate_selection,
)
from productwise.core.services.balance import AsOfBalanceCalculator
from productwise.core.services.date_range import normalize
from productwise.core.services.movement_classifier import (
    INBOUND,
    MOVEMENT_OPTIONS,
    OUTBOUND,
    Classification,
    all_categories,
    classify,
    signed_quantity,
)
from productwise.core.services.paging import PagedResult, fetch_all_pages
from productwise.core.services.report_export import (
    ExportResult,
    IReportExporter,
    ProductSection,
    ReportDocument,
    ReportExportService,
    SectionRow,
)

__all__ = [
    # Classification
    "Classification",
    "classify",
    "all_categories",
    "signed_quantity",
    "MOVEMENT_OPTIONS",
    "INBOUND",
    "OUTBOUND",
    # Date range
    "normalize",
    # Aggregation
    "AggregationEngine",
    "CellMap",
    "ZERO",
    "fold_events",
    "validate_selection",
    # Balances
    "AsOfBalanceCalculator",
    # Paging
    "PagedResult",
    "fetch_all_pages",
    # Export
    "ReportExportService",
    "IReportExporter",
    "ReportDocument",
    "ProductSection",
    "SectionRow",
    "ExportResult",
]
