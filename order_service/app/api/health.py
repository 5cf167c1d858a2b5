import time
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..utils.logging import get_order_logger

logger = get_order_logger("health")

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Liveness plus a database round trip"""
    settings = request.app.state.settings
    check_start = time.time()

    database: Dict[str, Any]
    try:
        await request.app.state.database_manager.ping()
        database = {"status": "healthy"}
    except (SQLAlchemyError, OSError) as exc:
        logger.warning(
            "Database health check failed",
            extra={"error_type": type(exc).__name__},
        )
        database = {"status": "unhealthy", "error": type(exc).__name__}

    database["duration_ms"] = round((time.time() - check_start) * 1000, 2)
    healthy = database["status"] == "healthy"

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "service": "order-service",
            "version": settings.APP_VERSION,
            "status": "healthy" if healthy else "unhealthy",
            "checks": {"database": database},
            "timestamp": time.time(),
        },
    )
