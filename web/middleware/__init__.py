"""Middleware package for the Leadflow API."""

from .correlation import CorrelationMiddleware, get_correlation_id
from .error_handler import ErrorHandlerMiddleware
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "CorrelationMiddleware",
    "ErrorHandlerMiddleware",
    "SecurityHeadersMiddleware",
    "get_correlation_id",
]
