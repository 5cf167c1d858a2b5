"""
Logging middleware for Order Service.
"""

from .request_logging import (
    CORRELATION_HEADER,
    RequestLoggingMiddleware,
    setup_order_request_logging,
)

__all__ = [
    "CORRELATION_HEADER",
    "RequestLoggingMiddleware",
    "setup_order_request_logging",
]
