from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import OrderNotFoundError, OrderStorageError
from ..models.order import Order
from ..schemas.order import OrderCreate, OrderItemsUpdate
from ..utils.logging import get_order_logger

logger = get_order_logger("repository")


class OrderRepository:
    """Data access for the ``orders`` table.

    Every method issues a single statement and commits it. Lookups by id fail
    with ``OrderNotFoundError``; updates and deletes by id are idempotent and
    return whether a row matched. Database errors are rolled back and raised
    as ``OrderStorageError``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except (SQLAlchemyError, OSError) as exc:
            logger.error(
                "Order storage operation failed",
                extra={"operation": operation, "error_type": type(exc).__name__},
            )
            await self.session.rollback()
            raise OrderStorageError(operation) from exc

    async def list_all(self) -> List[Order]:
        """All orders by ascending order date, undated orders first"""
        query = (
            select(Order)
            .order_by(Order.order_date.asc().nulls_first(), Order.order_id.asc())
            .execution_options(populate_existing=True)
        )
        async with self._storage_errors("list_all"):
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def create(self, order: OrderCreate) -> Order:
        """Insert a new order; fields are stored as given, the id is assigned"""
        new_order = Order(
            items=order.items,
            order_date=order.order_date,
            order_time=order.order_time,
            quantity=order.quantity,
            on_hand=order.on_hand,
        )
        async with self._storage_errors("create"):
            self.session.add(new_order)
            await self.session.commit()
            await self.session.refresh(new_order)
        return new_order

    async def get_by_id(self, order_id: int) -> Order:
        """Get order by ID"""
        query = (
            select(Order)
            .where(Order.order_id == order_id)
            .execution_options(populate_existing=True)
        )
        async with self._storage_errors("get_by_id"):
            result = await self.session.execute(query)
            order = result.scalars().one_or_none()
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def update(self, order_id: int, patch: OrderItemsUpdate) -> bool:
        """Overwrite the items of an order; other columns are left alone"""
        stmt = (
            update(Order).where(Order.order_id == order_id).values(items=patch.items)
        )
        async with self._storage_errors("update"):
            result = await self.session.execute(stmt)
            matched = result.rowcount > 0
            await self.session.commit()
        return matched

    async def delete_by_id(self, order_id: int) -> bool:
        """Delete an order"""
        stmt = delete(Order).where(Order.order_id == order_id)
        async with self._storage_errors("delete_by_id"):
            result = await self.session.execute(stmt)
            matched = result.rowcount > 0
            await self.session.commit()
        return matched
