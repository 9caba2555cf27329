"""
Service factory functions for dependency injection.

Wires the SQLite stores and report settings into the core services.
Use cases import from here.
"""

from typing import TYPE_CHECKING

from productwise.config import get_settings
from productwise.core.services import (
    AggregationEngine,
    AsOfBalanceCalculator,
    ReportExportService,
)

if TYPE_CHECKING:
    from productwise.core.interfaces import (
        IAdjustmentStore,
        ICatalogStore,
        IMovementStore,
    )


# Singleton service instances
_aggregation_engine: AggregationEngine | None = None
_balance_calculator: AsOfBalanceCalculator | None = None
_export_service: ReportExportService | None = None


async def get_aggregation_engine(
    movement_store: "IMovementStore | None" = None,
) -> AggregationEngine:
    """
    Get or create the AggregationEngine.

    Strictness and query concurrency come from REPORT_* settings.

    Args:
        movement_store: Optional movement store override

    Returns:
        Configured AggregationEngine
    """
    global _aggregation_engine

    if _aggregation_engine is not None and movement_store is None:
        return _aggregation_engine

    # Lazy import infrastructure to avoid circular imports
    from productwise.infrastructure.storage.sqlite import get_movement_store

    settings = get_settings().report
    engine = AggregationEngine(
        movement_store=movement_store or await get_movement_store(),
        strict=settings.strict_movements,
        max_concurrency=settings.query_concurrency,
    )

    if movement_store is None:
        _aggregation_engine = engine
    return engine


async def get_balance_calculator(
    engine: AggregationEngine | None = None,
    adjustment_store: "IAdjustmentStore | None" = None,
) -> AsOfBalanceCalculator:
    """Get or create the AsOfBalanceCalculator."""
    global _balance_calculator

    if _balance_calculator is not None and engine is None and adjustment_store is None:
        return _balance_calculator

    from productwise.infrastructure.storage.sqlite import get_adjustment_store

    calculator = AsOfBalanceCalculator(
        engine=engine or await get_aggregation_engine(),
        adjustment_store=adjustment_store or await get_adjustment_store(),
    )

    if engine is None and adjustment_store is None:
        _balance_calculator = calculator
    return calculator


async def get_export_service(
    engine: AggregationEngine | None = None,
    catalog_store: "ICatalogStore | None" = None,
) -> ReportExportService:
    """Get or create the ReportExportService."""
    global _export_service

    if _export_service is not None and engine is None and catalog_store is None:
        return _export_service

    from productwise.infrastructure.storage.sqlite import get_catalog_store

    service = ReportExportService(
        engine=engine or await get_aggregation_engine(),
        catalog_store=catalog_store or await get_catalog_store(),
    )

    if engine is None and catalog_store is None:
        _export_service = service
    return service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _aggregation_engine, _balance_calculator, _export_service
    _aggregation_engine = None
    _balance_calculator = None
    _export_service = None
