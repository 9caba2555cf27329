"""Response DTOs for API endpoints.

Quantities are exposed as JSON numbers; field names are camelCase on the
wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Reports ---


class LegacyReportResponse(CamelModel):
    """Warehouse -> movement -> quantity, summed over the selected products."""

    # Required; tells this shape apart from the tabular one
    by_warehouse: dict[str, dict[str, float]]


class ReportRowResponse(CamelModel):
    """Movement sums for one product in one warehouse."""

    warehouse_id: int
    product_id: int
    moves: dict[str, float]


class TabularReportResponse(CamelModel):
    rows: list[ReportRowResponse]
    totals: dict[str, float]


class AsOfRowResponse(CamelModel):
    """Running balance for one product in one warehouse."""

    warehouse_id: int
    product_id: int
    opening: float
    adjustments: float
    moves: dict[str, float]
    inbound: float
    outbound: float
    closing: float


class AsOfTotalsResponse(CamelModel):
    opening: float = 0.0
    adjustments: float = 0.0
    moves: dict[str, float] = Field(default_factory=dict)
    inbound: float = 0.0
    outbound: float = 0.0
    closing: float = 0.0


class AsOfReportResponse(CamelModel):
    rows: list[AsOfRowResponse]
    totals: AsOfTotalsResponse


# --- Catalog ---


class ProductResponse(CamelModel):
    id: int
    name: str
    code: str | None = None
    category_id: int | None = None
    category: str | None = None


class ProductListResponse(CamelModel):
    """Products from a bounded paged fetch."""

    items: list[ProductResponse]
    total: int
    truncated: bool = False
    next_offset: int | None = Field(
        default=None,
        description="Offset to resume from when the listing was truncated",
    )


class WarehouseResponse(CamelModel):
    id: int
    display_name: str


class WarehouseListResponse(CamelModel):
    items: list[WarehouseResponse]


class MovementOptionResponse(CamelModel):
    """A selectable movement category."""

    value: str
    label: str
    warehouse_column: str
    direction: str  # "in" or "out"
    aliases: list[str]


class MovementOptionListResponse(CamelModel):
    items: list[MovementOptionResponse]


# --- Health / errors ---


class ProviderHealthResponse(BaseModel):
    """Dependency health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    schema_version: str | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(CamelModel):
    """Standardized error response DTO.

    Every error response includes:
    - error: human-readable message, shown to the user as is
    - errorCode: machine-readable code (e.g. EMPTY_SELECTION)
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error: str = Field(..., description="Human-readable error description")
    error_code: str = Field(..., description="Machine-readable error code")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
