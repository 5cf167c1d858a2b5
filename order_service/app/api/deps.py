"""
FastAPI dependency injection for Order Service

Provides database sessions, the order service and the REST API client used by
the HTML front end. Everything is read from ``app.state``, where ``create_app``
puts it.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..clients.orders_api import OrdersApiClient
from ..core.database import get_db_session
from ..services.order_service import OrderService

# =====================================================
# DATABASE DEPENDENCIES
# =====================================================


async def get_async_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Provide async database session"""
    yield session


# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def get_order_service(
    session: AsyncSession = Depends(get_async_session),
) -> OrderService:
    """Provide OrderService instance bound to the request session"""
    return OrderService(session)


def get_orders_api_client(request: Request) -> OrdersApiClient:
    """Provide the REST API client created at startup"""
    return request.app.state.orders_api_client


# =====================================================
# COMMON DEPENDENCY ALIASES
# =====================================================

OrderServiceDep = Depends(get_order_service)
OrdersApiClientDep = Depends(get_orders_api_client)
