"""Tests for the report export service."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from productwise.core.entities import Product, Selection, Warehouse
from productwise.core.services import (
    AggregationEngine,
    IReportExporter,
    ReportDocument,
    ReportExportService,
)


@pytest.fixture
def catalog_store():
    store = AsyncMock()
    store.get_products.return_value = {
        1: Product(id=1, name="Olive Oil", code="6111", category_id=7),
        2: Product(id=2, name="Flour", category_id=None),
    }
    store.fetch_category_names.return_value = {7: "Groceries"}
    store.list_warehouses.return_value = [Warehouse(id=10, display_name="Main")]
    return store


@pytest.fixture
def engine(make_event, movement_store_factory):
    return AggregationEngine(
        movement_store_factory(
            [
                make_event("purchase", 10, product_id=1, dest=10),
                make_event("sales", 4, product_id=1, source=10),
                make_event("sales", 1, product_id=1, source=11),
                make_event("sales", 2, product_id=2, source=10),
            ]
        )
    )


class RecordingExporter(IReportExporter):
    media_type = "text/plain"
    file_extension = "txt"

    def __init__(self):
        self.document: ReportDocument | None = None

    def render(self, document: ReportDocument) -> bytes:
        self.document = document
        return b"rendered"


class TestReportExportService:
    async def test_build_document(self, engine, catalog_store):
        service = ReportExportService(engine, catalog_store)

        document = await service.build_document(
            Selection(product_ids=[1, 2, 3], warehouse_ids=[10, 11], movements=["sale", "purchase"])
        )

        assert document.movements == [("sales", "Sales"), ("purchase", "Purchases")]
        assert [s.product_label for s in document.sections] == [
            "Olive Oil (6111)",
            "Flour",
            "Product 3",
        ]
        assert document.sections[0].category == "Groceries"
        assert document.sections[1].category is None

        oil = document.sections[0]
        assert [r.warehouse_label for r in oil.rows] == ["Main", "Warehouse 11"]
        assert oil.rows[0].values == {"sales": Decimal("4"), "purchase": Decimal("10")}
        assert oil.rows[1].values == {"sales": Decimal("1"), "purchase": Decimal("0")}
        assert oil.totals == {"sales": Decimal("5"), "purchase": Decimal("10")}

        catalog_store.fetch_category_names.assert_awaited_once_with({7})

    async def test_export_renders_through_exporter(self, engine, catalog_store):
        service = ReportExportService(engine, catalog_store)
        exporter = RecordingExporter()

        result = await service.export(
            Selection(product_ids=[1], warehouse_ids=[10], movements=["sales"]), exporter
        )

        assert result.content == b"rendered"
        assert result.media_type == "text/plain"
        assert result.filename == "movement_report.txt"
        assert exporter.document is not None
        assert len(exporter.document.sections) == 1

    async def test_unknown_movement_label_is_its_name(self, engine, catalog_store):
        service = ReportExportService(engine, catalog_store)

        document = await service.build_document(
            Selection(product_ids=[1], warehouse_ids=[10], movements=["gift"])
        )

        assert document.movements == [("gift", "gift")]
