"""API middleware."""

from productwise.api.middleware.error_handler import ErrorHandlerMiddleware
from productwise.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
