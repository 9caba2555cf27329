"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation. JSON bodies use camelCase
field names.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from productwise.core.entities.movement import Selection


class ReportRequest(BaseModel):
    """Report selection as posted by clients.

    Missing or null lists are accepted here and rejected by the aggregation
    engine with a field-specific message.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_ids: list[int] | None = Field(
        default=None,
        description="Products to report on",
        examples=[[1, 2]],
    )
    warehouse_ids: list[int] | None = Field(
        default=None,
        description="Warehouses to report on",
        examples=[[10]],
    )
    movements: list[str] | None = Field(
        default=None,
        description="Movement categories or aliases",
        examples=[["purchase", "sales"]],
    )
    from_date: str | None = Field(
        default=None,
        description="First day of the range (YYYY-MM-DD), inclusive",
        examples=["2024-01-01"],
    )
    to_date: str | None = Field(
        default=None,
        description="Last day of the range (YYYY-MM-DD), inclusive",
        examples=["2024-01-31"],
    )

    def to_selection(self) -> Selection:
        return Selection(
            product_ids=self.product_ids or [],
            warehouse_ids=self.warehouse_ids or [],
            movements=self.movements or [],
            from_date=self.from_date,
            to_date=self.to_date,
        )
