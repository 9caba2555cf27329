"""Catalog listing use cases backing the report pickers."""

import unicodedata
from dataclasses import dataclass, field

from productwise.application.dto.responses import (
    MovementOptionListResponse,
    MovementOptionResponse,
    ProductListResponse,
    ProductResponse,
    WarehouseListResponse,
    WarehouseResponse,
)
from productwise.config import get_logger, get_settings
from productwise.core.entities.catalog import Product, Warehouse
from productwise.core.interfaces.catalog_store import ICatalogStore
from productwise.core.services import (
    INBOUND,
    MOVEMENT_OPTIONS,
    classify,
    fetch_all_pages,
)

logger = get_logger(__name__)


def normalize_search(text: str | None) -> str:
    """Compatibility-decompose and lowercase for prefix matching."""
    return unicodedata.normalize("NFKD", text or "").lower()


def matches_prefix(value: str | None, query: str | None) -> bool:
    """True when query is blank or value starts with it, ignoring case."""
    prefix = normalize_search((query or "").strip())
    if not prefix:
        return True
    return normalize_search(value).startswith(prefix)


def _matches_code(product: Product, code: str | None) -> bool:
    """A given but blank barcode query keeps only products that have a code."""
    if code is not None and not code.strip():
        return bool(product.code)
    return matches_prefix(product.code, code)


@dataclass
class ProductListing:
    products: list[Product] = field(default_factory=list)
    category_names: dict[int, str] = field(default_factory=dict)
    total: int = 0
    truncated: bool = False
    next_offset: int | None = None


class ListProductsUseCase:
    """List products for the picker, with name and barcode prefix search."""

    def __init__(self, catalog_store: ICatalogStore | None = None):
        self._catalog_store = catalog_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from productwise.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def execute(
        self,
        name: str | None = None,
        code: str | None = None,
        limit: int | None = None,
    ) -> ProductListing:
        store = await self._get_catalog_store()
        settings = get_settings().report

        paged = await fetch_all_pages(
            store.list_products,
            page_size=settings.catalog_page_size,
            max_records=settings.catalog_max_records,
        )

        products = [
            p for p in paged.items if matches_prefix(p.name, name) and _matches_code(p, code)
        ]
        total = len(products)
        if limit is not None:
            products = products[:limit]

        category_names = await store.fetch_category_names(
            {p.category_id for p in products if p.category_id is not None}
        )

        logger.info(
            "products_listed",
            fetched=len(paged.items),
            matched=total,
            returned=len(products),
            truncated=paged.truncated,
        )
        return ProductListing(
            products=products,
            category_names=category_names,
            total=total,
            truncated=paged.truncated,
            next_offset=paged.next_offset if paged.truncated else None,
        )

    def to_response(self, listing: ProductListing) -> ProductListResponse:
        return ProductListResponse(
            items=[
                ProductResponse(
                    id=p.id,
                    name=p.name,
                    code=p.code,
                    category_id=p.category_id,
                    category=listing.category_names.get(p.category_id)
                    if p.category_id is not None
                    else None,
                )
                for p in listing.products
            ],
            total=listing.total,
            truncated=listing.truncated,
            next_offset=listing.next_offset,
        )


class ListWarehousesUseCase:
    """List warehouses for the picker."""

    def __init__(self, catalog_store: ICatalogStore | None = None):
        self._catalog_store = catalog_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from productwise.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def execute(self) -> list[Warehouse]:
        store = await self._get_catalog_store()
        return await store.list_warehouses()

    def to_response(self, warehouses: list[Warehouse]) -> WarehouseListResponse:
        return WarehouseListResponse(
            items=[WarehouseResponse(id=w.id, display_name=w.display_name) for w in warehouses]
        )


def list_movement_options() -> MovementOptionListResponse:
    """Known movement categories in display order."""
    items = []
    for category, label in MOVEMENT_OPTIONS:
        classification = classify(category.value)
        items.append(
            MovementOptionResponse(
                value=classification.category,
                label=label,
                warehouse_column=classification.column.value,
                direction="in" if classification.sign == INBOUND else "out",
                aliases=list(classification.aliases),
            )
        )
    return MovementOptionListResponse(items=items)
