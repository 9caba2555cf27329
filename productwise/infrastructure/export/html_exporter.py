"""HTML-table rendering of movement reports, opened by spreadsheet apps."""

from decimal import Decimal
from html import escape

from productwise.core.services.report_export import IReportExporter, ReportDocument
from productwise.infrastructure.export.csv_exporter import format_quantity


class HTMLReportExporter(IReportExporter):
    """Renders one <table> per product with a Totals footer row."""

    media_type = "application/vnd.ms-excel"
    file_extension = "xls"

    def render(self, document: ReportDocument) -> bytes:
        labels = [label for _, label in document.movements]
        parts = [
            "<html><head><meta charset=\"utf-8\"></head><body>",
            f"<h1>{escape(document.title)}</h1>",
            f"<p>From: {escape(document.from_date or '')} "
            f"To: {escape(document.to_date or '')}</p>",
        ]

        for section in document.sections:
            heading = escape(section.product_label)
            if section.category:
                heading += f" <small>{escape(section.category)}</small>"
            parts.append(f"<h2>{heading}</h2>")
            parts.append("<table border=\"1\">")
            parts.append(
                "<thead><tr><th>Warehouse</th>"
                + "".join(f"<th>{escape(label)}</th>" for label in labels)
                + "</tr></thead>"
            )

            parts.append("<tbody>")
            for row in section.rows:
                cells = "".join(
                    f"<td>{format_quantity(row.values.get(key))}</td>"
                    for key, _ in document.movements
                )
                parts.append(f"<tr><td>{escape(row.warehouse_label)}</td>{cells}</tr>")
            parts.append("</tbody>")

            totals = section.totals
            footer = "".join(
                f"<td>{format_quantity(totals.get(key, Decimal('0')))}</td>"
                for key, _ in document.movements
            )
            parts.append(f"<tfoot><tr><th>Totals</th>{footer}</tr></tfoot>")
            parts.append("</table>")

        parts.append("</body></html>")
        return "\n".join(parts).encode("utf-8")
