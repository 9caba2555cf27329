"""API route modules."""

from productwise.api.routes.catalog import router as catalog_router
from productwise.api.routes.health import router as health_router
from productwise.api.routes.report import router as report_router

__all__ = [
    "health_router",
    "report_router",
    "catalog_router",
]
