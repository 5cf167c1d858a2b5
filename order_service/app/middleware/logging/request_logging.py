"""
HTTP request logging middleware for Order Service.

Assigns every request a correlation id (taken from ``X-Correlation-ID`` when
the caller sends one), stores it on ``request.state`` for the error handler,
echoes it in the response and logs request start and completion.
"""

import time
import uuid
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ...utils.logging import get_order_logger

logger = get_order_logger("request_logging")

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request/response lifecycle logging with correlation ids"""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        start_time = time.time()

        logger.debug(
            "HTTP request started",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "event_type": "http_request_start",
            },
        )

        response = await call_next(request)

        duration_ms = round((time.time() - start_time) * 1000, 2)
        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400 or duration_ms > 5000:
            log = logger.warning
        else:
            log = logger.info

        log(
            "HTTP request completed",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "event_type": "http_request_complete",
            },
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Response-Time"] = str(duration_ms)
        return response


def setup_order_request_logging(app: FastAPI) -> None:
    app.add_middleware(RequestLoggingMiddleware)
