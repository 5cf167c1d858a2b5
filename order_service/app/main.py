import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api.health import router as health_router
from .api.orders import router as orders_router
from .api.web import router as web_router
from .clients.orders_api import OrdersApiClient
from .core.database import OrderServiceDatabaseManager
from .core.settings import OrderSettings, get_settings
from .middleware.error import setup_order_error_handling
from .middleware.logging import setup_order_request_logging
from .utils.logging import setup_order_logging

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: OrderSettings = app.state.settings
    logger = app.state.logger
    startup_start = time.time()

    try:
        logger.info(
            "Starting order service initialization",
            extra={
                "environment": settings.ENVIRONMENT,
                "debug_mode": settings.DEBUG,
                "service_version": settings.APP_VERSION,
            },
        )

        db_start = time.time()
        await app.state.database_manager.create_tables()
        db_duration = int((time.time() - db_start) * 1000)
        logger.info(
            "Database initialization completed", extra={"duration_ms": db_duration}
        )

        # Tests may install a client with an in-process transport beforehand
        if getattr(app.state, "orders_api_client", None) is None:
            app.state.orders_api_client = OrdersApiClient(
                base_url=settings.ORDERS_API_URL, timeout=settings.REQUEST_TIMEOUT
            )

        logger.info(
            "Order service started successfully",
            extra={
                "total_startup_duration_ms": int((time.time() - startup_start) * 1000),
                "orders_api_url": app.state.orders_api_client.base_url,
            },
        )

    except Exception as e:
        logger.error(
            "Failed to start order service",
            exc_info=True,
            extra={
                "startup_duration_ms": int((time.time() - startup_start) * 1000),
                "error_type": type(e).__name__,
            },
        )
        raise

    yield

    shutdown_start = time.time()
    try:
        logger.info("Starting order service shutdown")

        await app.state.orders_api_client.aclose()
        app.state.orders_api_client = None
        await app.state.database_manager.close()

        logger.info(
            "Order service shutdown completed",
            extra={"shutdown_duration_ms": int((time.time() - shutdown_start) * 1000)},
        )

    except Exception as e:
        logger.error(
            "Error during order service shutdown",
            exc_info=True,
            extra={
                "shutdown_duration_ms": int((time.time() - shutdown_start) * 1000),
                "error_type": type(e).__name__,
            },
        )
        raise


def create_app(settings: Optional[OrderSettings] = None) -> FastAPI:
    settings = settings or get_settings()

    logger = setup_order_logging(
        "order_service",
        log_level=settings.LOG_LEVEL,
        enable_file_logging=settings.file_logging_enabled,
        log_dir=settings.LOG_DIR,
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.state.settings = settings
    app.state.logger = logger
    app.state.database_manager = OrderServiceDatabaseManager.from_settings(settings)
    app.state.orders_api_client = None

    # === MIDDLEWARE STACK ===

    # 1. CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )

    # 2. Request logging / correlation ids (outermost, added last)
    setup_order_request_logging(app)

    # 3. Error handling
    setup_order_error_handling(app)

    routers_info: list[dict[str, Any]] = []

    app.include_router(health_router, tags=["Health"])
    routers_info.append({"router": "health", "prefix": "", "tags": ["Health"]})

    app.include_router(orders_router, tags=["Order Management"])
    routers_info.append(
        {"router": "orders", "prefix": "/orders", "tags": ["Order Management"]}
    )

    app.include_router(web_router)
    routers_info.append({"router": "web", "prefix": "", "tags": []})

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    logger.info(
        "API routes configured",
        extra={"total_routers": len(routers_info), "routers": routers_info},
    )

    return app


app = create_app()
