"""API tests for report endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from productwise.api.dependencies import (
    get_export_report_use_case,
    get_generate_as_of_report_use_case,
    get_generate_report_use_case,
)
from productwise.api.main import app
from productwise.application.use_cases import (
    ExportReportUseCase,
    GenerateAsOfReportUseCase,
    GenerateReportUseCase,
)
from productwise.core.entities import Product, Warehouse
from productwise.core.services import (
    AggregationEngine,
    AsOfBalanceCalculator,
    ReportExportService,
)

BODY = {
    "productIds": [1],
    "warehouseIds": [10],
    "movements": ["purchase", "sales"],
    "fromDate": "2024-01-01",
    "toDate": "2024-01-31",
}


@pytest.fixture
def movement_store(make_event, movement_store_factory):
    return movement_store_factory(
        [
            make_event("purchase", 10, dest=10, at="2023-12-20T00:00:00Z"),
            make_event("purchase", 10, dest=10),
            make_event("purchase", 5, dest=10),
            make_event("purchase", -2, dest=10),
            make_event("sale", 4, source=10),
        ]
    )


@pytest.fixture
async def report_client(movement_store):
    engine = AggregationEngine(movement_store)
    adjustments = AsyncMock()
    adjustments.fetch_stock_adjustments.return_value = {}
    catalog = AsyncMock()
    catalog.get_products.return_value = {1: Product(id=1, name="Milk, whole", category_id=None)}
    catalog.fetch_category_names.return_value = {}
    catalog.list_warehouses.return_value = [Warehouse(id=10, display_name="Main")]

    app.dependency_overrides[get_generate_report_use_case] = lambda: GenerateReportUseCase(
        engine=engine
    )
    app.dependency_overrides[get_generate_as_of_report_use_case] = (
        lambda: GenerateAsOfReportUseCase(
            calculator=AsOfBalanceCalculator(engine, adjustments)
        )
    )
    app.dependency_overrides[get_export_report_use_case] = lambda: ExportReportUseCase(
        export_service=ReportExportService(engine, catalog)
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_generate_report_use_case, None)
    app.dependency_overrides.pop(get_generate_as_of_report_use_case, None)
    app.dependency_overrides.pop(get_export_report_use_case, None)


class TestReportAPI:
    async def test_legacy_layout_is_default(self, report_client: AsyncClient):
        response = await report_client.post("/api/report", json=BODY)

        assert response.status_code == 200
        assert response.json() == {"byWarehouse": {"10": {"purchase": 13.0, "sales": 4.0}}}
        assert "X-Request-ID" in response.headers

    async def test_tabular_layout(self, report_client: AsyncClient):
        response = await report_client.post("/api/report?layout=tabular", json=BODY)

        assert response.status_code == 200
        assert response.json() == {
            "rows": [{"warehouseId": 10, "productId": 1, "moves": {"purchase": 13.0, "sales": 4.0}}],
            "totals": {"purchase": 13.0, "sales": 4.0},
        }

    @pytest.mark.parametrize(
        ("field", "message"),
        [
            ("productIds", "Select at least one product"),
            ("warehouseIds", "Select at least one warehouse"),
            ("movements", "Select at least one movement type"),
        ],
    )
    async def test_empty_selection_is_400(
        self, report_client: AsyncClient, movement_store, field: str, message: str
    ):
        response = await report_client.post("/api/report", json={**BODY, field: []})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == message
        assert body["errorCode"] == "EMPTY_SELECTION"
        assert body["detail"] == field
        assert body["path"] == "/api/report"
        assert movement_store.calls == []

    async def test_missing_lists_are_400(self, report_client: AsyncClient):
        response = await report_client.post("/api/report", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Select at least one product"

    async def test_query_failure_is_500_with_verbatim_message(
        self, report_client: AsyncClient, movement_store
    ):
        movement_store.failures["sales"] = RuntimeError('relation "stock_movements" is locked')

        response = await report_client.post("/api/report", json=BODY)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == 'relation "stock_movements" is locked'
        assert body["errorCode"] == "MOVEMENT_QUERY_FAILED"
        assert body["detail"] == "sales"
        assert "byWarehouse" not in body

    async def test_invalid_layout_is_422(self, report_client: AsyncClient):
        response = await report_client.post("/api/report?layout=wide", json=BODY)

        assert response.status_code == 422
        assert response.json()["errorCode"] == "VALIDATION_ERROR"


class TestAsOfAPI:
    async def test_as_of_rows(self, report_client: AsyncClient):
        response = await report_client.post("/api/report/as-of", json=BODY)

        assert response.status_code == 200
        row = response.json()["rows"][0]
        assert row["warehouseId"] == 10
        assert row["productId"] == 1
        assert row["opening"] == 10.0
        assert row["adjustments"] == 0.0
        assert row["moves"] == {"purchase": 13.0, "sales": 4.0}
        assert row["closing"] == 19.0
        assert response.json()["totals"]["closing"] == 19.0

    async def test_as_of_validation(self, report_client: AsyncClient):
        response = await report_client.post("/api/report/as-of", json={**BODY, "movements": None})

        assert response.status_code == 400
        assert response.json()["error"] == "Select at least one movement type"


class TestExportAPI:
    async def test_csv_download(self, report_client: AsyncClient):
        response = await report_client.post("/api/report/export?format=csv", json=BODY)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="movement_report.csv"' in response.headers["content-disposition"]
        assert '"Milk, whole"' in response.text
        assert "Totals,13,4" in response.text

    async def test_xls_download(self, report_client: AsyncClient):
        response = await report_client.post("/api/report/export?format=xls", json=BODY)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/vnd.ms-excel")
        assert response.text.count("<table") == 1

    async def test_unknown_format_is_422(self, report_client: AsyncClient):
        response = await report_client.post("/api/report/export?format=pdf", json=BODY)

        assert response.status_code == 422
