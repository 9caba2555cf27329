"""Catalog and adjustment entities."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class Category(BaseModel):
    """Product category."""

    id: int
    name: str


class Product(BaseModel):
    """Catalog product."""

    id: int
    name: str
    code: str | None = None  # barcode
    category_id: int | None = None


class Warehouse(BaseModel):
    """Stock location."""

    id: int
    display_name: str


class StockAdjustment(BaseModel):
    """Manual stock correction for a product in a warehouse."""

    id: int | None = None
    product_id: int
    warehouse_id: int
    quantity: Decimal  # signed
    adjusted_at: datetime
    reason: str | None = None
