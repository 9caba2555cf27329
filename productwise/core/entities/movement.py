"""Stock movement domain entities."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MovementCategory(str, Enum):
    """Canonical stock movement categories."""

    PURCHASE = "purchase"
    PURCHASE_RETURN = "purchase_return"
    SALES = "sales"
    SALES_RETURNS = "sales_returns"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"
    MANUFACTURING = "manufacturing"
    WASTAGES = "wastages"
    CONSUMPTION = "consumption"


class WarehouseColumn(str, Enum):
    """Which warehouse of a movement it is attributed to."""

    SOURCE = "source"
    DEST = "dest"


class MovementEvent(BaseModel):
    """One recorded stock transaction. Read-only for this service."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    product_id: int
    source_warehouse_id: int | None = None
    dest_warehouse_id: int | None = None
    movement_type: str  # raw stored value, may be an alias
    quantity: Decimal
    occurred_at: datetime

    def warehouse_for(self, column: WarehouseColumn) -> int | None:
        """Warehouse id on the given grouping column."""
        if column is WarehouseColumn.DEST:
            return self.dest_warehouse_id
        return self.source_warehouse_id


def _dedupe(values: list) -> list:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class Selection(BaseModel):
    """Parameters of one report request.

    Lists keep the caller's order with duplicates removed. Emptiness is
    checked by the aggregation engine, not here, so that the caller gets
    the field-specific message.
    """

    product_ids: list[int] = Field(default_factory=list)
    warehouse_ids: list[int] = Field(default_factory=list)
    movements: list[str] = Field(default_factory=list)
    from_date: str | None = None
    to_date: str | None = None

    @field_validator("product_ids", "warehouse_ids", "movements", mode="after")
    @classmethod
    def dedupe(cls, v: list) -> list:
        return _dedupe(v)


class AggregationCell(BaseModel):
    """Summed quantity for one (product, warehouse, movement) key."""

    product_id: int
    warehouse_id: int
    movement: str
    quantity: Decimal = Decimal("0")


class AsOfRow(BaseModel):
    """Running balance for one (product, warehouse) pair."""

    product_id: int
    warehouse_id: int
    opening: Decimal = Decimal("0")
    adjustments: Decimal = Decimal("0")
    movement_sums: dict[str, Decimal] = Field(default_factory=dict)
    inbound: Decimal = Decimal("0")
    outbound: Decimal = Decimal("0")

    @property
    def closing(self) -> Decimal:
        """opening + inbound + adjustments - outbound."""
        return self.opening + self.inbound + self.adjustments - self.outbound
