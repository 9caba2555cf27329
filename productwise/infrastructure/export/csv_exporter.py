"""CSV rendering of movement reports."""

import csv
from decimal import Decimal
from io import StringIO
from typing import Any

from productwise.core.services.report_export import IReportExporter, ReportDocument


def format_quantity(value: Any) -> str:
    """Format a cell value for file output."""
    if value is None:
        return ""
    if isinstance(value, Decimal):
        # Fixed-point without trailing zeros: 13.00 -> 13, 1E+1 -> 10
        if value.is_zero():
            return "0"
        return format(value.normalize(), "f")
    return str(value)


class CSVReportExporter(IReportExporter):
    """
    One block per product: a title line, a header row, one row per
    warehouse and a Totals footer, separated by blank lines.

    Quoting is QUOTE_MINIMAL: fields holding a comma, quote or newline are
    wrapped in quotes with embedded quotes doubled.
    """

    media_type = "text/csv"
    file_extension = "csv"

    def render(self, document: ReportDocument) -> bytes:
        output = StringIO()
        writer = csv.writer(output, lineterminator="\n")

        writer.writerow([document.title])
        writer.writerow(["From", document.from_date or ""])
        writer.writerow(["To", document.to_date or ""])

        labels = [label for _, label in document.movements]
        for section in document.sections:
            writer.writerow([])
            title = [section.product_label]
            if section.category:
                title.append(section.category)
            writer.writerow(title)
            writer.writerow(["Warehouse", *labels])

            for row in section.rows:
                writer.writerow([
                    row.warehouse_label,
                    *(format_quantity(row.values.get(key)) for key, _ in document.movements),
                ])

            totals = section.totals
            writer.writerow([
                "Totals",
                *(format_quantity(totals.get(key, Decimal("0"))) for key, _ in document.movements),
            ])

        return output.getvalue().encode("utf-8")
