"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers. Tests replace these
through app.dependency_overrides.
"""

from productwise.application.services import (
    get_aggregation_engine,
    get_balance_calculator,
    get_export_service,
)
from productwise.application.use_cases import (
    ExportReportUseCase,
    GenerateAsOfReportUseCase,
    GenerateReportUseCase,
    ListProductsUseCase,
    ListWarehousesUseCase,
)
from productwise.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    get_catalog_store,
)


async def get_cat_store() -> SQLiteCatalogStore:
    """Get catalog store."""
    return await get_catalog_store()


async def get_generate_report_use_case() -> GenerateReportUseCase:
    """Get report use case."""
    return GenerateReportUseCase(engine=await get_aggregation_engine())


async def get_generate_as_of_report_use_case() -> GenerateAsOfReportUseCase:
    """Get as-of report use case."""
    return GenerateAsOfReportUseCase(calculator=await get_balance_calculator())


async def get_export_report_use_case() -> ExportReportUseCase:
    """Get export use case."""
    return ExportReportUseCase(export_service=await get_export_service())


async def get_list_products_use_case() -> ListProductsUseCase:
    return ListProductsUseCase(catalog_store=await get_cat_store())


async def get_list_warehouses_use_case() -> ListWarehousesUseCase:
    return ListWarehousesUseCase(catalog_store=await get_cat_store())
