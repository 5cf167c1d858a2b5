"""
Pytest configuration and fixtures for Order Service tests.
"""

import os
from datetime import date, time
from typing import Any, AsyncGenerator, Generator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Set up test environment variables before importing anything else
os.environ.setdefault("APP_NAME", "Order Service Test")
os.environ.setdefault("APP_VERSION", "1.0.0")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ORDER_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ORDERS_API_URL", "http://testserver")

from order_service.app.clients.orders_api import OrdersApiClient
from order_service.app.core.database import OrderServiceDatabaseManager
from order_service.app.core.settings import OrderSettings
from order_service.app.main import create_app
from order_service.app.repository.order_repository import OrderRepository
from order_service.app.schemas.order import OrderCreate

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> OrderSettings:
    """Settings pointing at a private in-memory database."""
    return OrderSettings(
        APP_NAME="Order Service Test",
        DEBUG=True,
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        ORDER_DATABASE_URL=TEST_DATABASE_URL,
        ORDERS_API_URL="http://testserver",
    )


@pytest.fixture
async def test_database_manager() -> AsyncGenerator[OrderServiceDatabaseManager, None]:
    """Fresh in-memory database with the orders table created."""
    manager = OrderServiceDatabaseManager(TEST_DATABASE_URL)
    await manager.create_tables()

    yield manager

    await manager.close()


@pytest.fixture
async def db_session(test_database_manager) -> AsyncGenerator[Any, None]:
    """Create a test database session."""
    async with test_database_manager.async_session_maker() as session:
        yield session


@pytest.fixture
def order_repository(db_session) -> OrderRepository:
    return OrderRepository(db_session)


@pytest.fixture
def test_app(test_settings) -> FastAPI:
    """Application whose HTML pages call its own REST API in-process."""
    app = create_app(test_settings)
    app.state.orders_api_client = OrdersApiClient(
        base_url="http://testserver", transport=httpx.ASGITransport(app=app)
    )
    return app


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """FastAPI test client fixture; runs startup and shutdown."""
    with TestClient(test_app) as test_client:
        yield test_client


@pytest.fixture
def sample_order() -> OrderCreate:
    """The order used in most examples."""
    return OrderCreate(
        items="Widget",
        order_date=date(2023, 1, 1),
        order_time=time(10, 0),
        quantity=5,
        on_hand=True,
    )


@pytest.fixture
def sample_order_payload() -> dict:
    """JSON body for the sample order."""
    return {
        "items": "Widget",
        "orderDate": "2023-01-01",
        "orderTime": "10:00",
        "quantity": 5,
        "onHand": True,
    }
