"""
Catalog endpoints for the report pickers.
"""

from fastapi import APIRouter, Depends, Query

from productwise.api.dependencies import (
    get_list_products_use_case,
    get_list_warehouses_use_case,
)
from productwise.application.dto.responses import (
    MovementOptionListResponse,
    ProductListResponse,
    WarehouseListResponse,
)
from productwise.application.use_cases import (
    ListProductsUseCase,
    ListWarehousesUseCase,
    list_movement_options,
)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    name: str | None = Query(default=None, description="Product name prefix"),
    code: str | None = Query(default=None, description="Barcode prefix"),
    limit: int | None = Query(default=None, ge=1, description="Maximum items returned"),
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
) -> ProductListResponse:
    """
    List products with their category names.

    Prefix filters ignore case and compare NFKD-normalized text.
    """
    listing = await use_case.execute(name=name, code=code, limit=limit)
    return use_case.to_response(listing)


@router.get("/warehouses", response_model=WarehouseListResponse)
async def list_warehouses(
    use_case: ListWarehousesUseCase = Depends(get_list_warehouses_use_case),
) -> WarehouseListResponse:
    """List warehouses by display name."""
    warehouses = await use_case.execute()
    return use_case.to_response(warehouses)


@router.get("/movements", response_model=MovementOptionListResponse)
async def list_movements() -> MovementOptionListResponse:
    """List the movement types a report can be built from."""
    return list_movement_options()
