"""API middleware."""

from almacen.api.middleware.error_handler import ErrorHandlerMiddleware
from almacen.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
