"""
Report export service.

Builds a per-product tabular document from aggregated cells and catalog
labels. Rendering to a file format is delegated to an injected
IReportExporter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal

from productwise.config import get_logger
from productwise.core.entities.movement import Selection
from productwise.core.interfaces.catalog_store import ICatalogStore
from productwise.core.services.aggregation import ZERO, AggregationEngine
from productwise.core.services.movement_classifier import MOVEMENT_OPTIONS

logger = get_logger(__name__)

MOVEMENT_LABELS = {category.value: label for category, label in MOVEMENT_OPTIONS}


@dataclass
class SectionRow:
    """One warehouse line of a product sub-table."""

    warehouse_id: int
    warehouse_label: str
    values: dict[str, Decimal]


@dataclass
class ProductSection:
    """Sub-table for one product, with a totals footer."""

    product_id: int
    product_label: str
    category: str | None
    rows: list[SectionRow] = field(default_factory=list)

    @property
    def totals(self) -> dict[str, Decimal]:
        result: dict[str, Decimal] = {}
        for row in self.rows:
            for movement, quantity in row.values.items():
                result[movement] = result.get(movement, ZERO) + quantity
        return result


@dataclass
class ReportDocument:
    """Everything an exporter needs to render a report."""

    title: str
    from_date: str | None
    to_date: str | None
    movements: list[tuple[str, str]]  # (key, label)
    sections: list[ProductSection] = field(default_factory=list)


class IReportExporter(ABC):
    """Interface for report file renderers."""

    media_type: str
    file_extension: str

    @abstractmethod
    def render(self, document: ReportDocument) -> bytes:
        """Render the document to file bytes."""
        pass


@dataclass
class ExportResult:
    """Rendered export file."""

    content: bytes
    media_type: str
    filename: str


class ReportExportService:
    """Aggregates a selection and renders it through an exporter."""

    def __init__(self, engine: AggregationEngine, catalog_store: ICatalogStore):
        self._engine = engine
        self._catalog_store = catalog_store

    async def build_document(self, selection: Selection) -> ReportDocument:
        """Aggregate the selection and resolve catalog labels."""
        cell_map = await self._engine.aggregate_cells(selection)
        classifications = self._engine.classify_movements(selection.movements)

        products = await self._catalog_store.get_products(selection.product_ids)
        category_names = await self._catalog_store.fetch_category_names(
            {p.category_id for p in products.values() if p.category_id is not None}
        )
        warehouse_names = {
            w.id: w.display_name for w in await self._catalog_store.list_warehouses()
        }

        movements = [
            (c.category, MOVEMENT_LABELS.get(c.category, c.category)) for c in classifications
        ]

        sections = []
        for product_id in selection.product_ids:
            product = products.get(product_id)
            label = product.name if product else f"Product {product_id}"
            if product and product.code:
                label = f"{label} ({product.code})"
            section = ProductSection(
                product_id=product_id,
                product_label=label,
                category=category_names.get(product.category_id) if product else None,
            )
            for warehouse_id in selection.warehouse_ids:
                section.rows.append(
                    SectionRow(
                        warehouse_id=warehouse_id,
                        warehouse_label=warehouse_names.get(
                            warehouse_id, f"Warehouse {warehouse_id}"
                        ),
                        values={
                            key: cell_map.get(product_id, warehouse_id, key)
                            for key, _ in movements
                        },
                    )
                )
            sections.append(section)

        return ReportDocument(
            title="Product movement report",
            from_date=selection.from_date,
            to_date=selection.to_date,
            movements=movements,
            sections=sections,
        )

    async def export(self, selection: Selection, exporter: IReportExporter) -> ExportResult:
        """Build and render the report."""
        document = await self.build_document(selection)
        content = exporter.render(document)

        logger.info(
            "report_exported",
            format=exporter.file_extension,
            sections=len(document.sections),
            size_bytes=len(content),
        )
        return ExportResult(
            content=content,
            media_type=exporter.media_type,
            filename=f"movement_report.{exporter.file_extension}",
        )
