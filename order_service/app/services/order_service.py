"""
Order service: the REST layer's entry point to the order store.
"""

import time
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.order import Order
from ..repository.order_repository import OrderRepository
from ..schemas.order import OrderCreate, OrderItemsUpdate
from ..utils.logging import get_order_logger

logger = get_order_logger("service")


def _elapsed_ms(start: float) -> int:
    return int((time.time() - start) * 1000)


class OrderService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.order_repository = OrderRepository(session)

    async def list_orders(self) -> List[Order]:
        """List every order, sorted by order date"""
        start = time.time()
        orders = await self.order_repository.list_all()
        logger.info(
            "Orders listed",
            extra={"order_count": len(orders), "duration_ms": _elapsed_ms(start)},
        )
        return orders

    async def create_order(self, order_data: OrderCreate) -> Order:
        """Store a new order and return it with its assigned id"""
        start = time.time()
        order = await self.order_repository.create(order_data)
        logger.info(
            "Order created",
            extra={"order_id": order.order_id, "duration_ms": _elapsed_ms(start)},
        )
        return order

    async def get_order(self, order_id: int) -> Order:
        """Get one order; raises OrderNotFoundError when it does not exist"""
        return await self.order_repository.get_by_id(order_id)

    async def update_order_items(self, order_id: int, patch: OrderItemsUpdate) -> bool:
        start = time.time()
        matched = await self.order_repository.update(order_id, patch)
        logger.info(
            "Order items updated" if matched else "Order update matched no rows",
            extra={
                "order_id": order_id,
                "matched": matched,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return matched

    async def delete_order(self, order_id: int) -> bool:
        start = time.time()
        matched = await self.order_repository.delete_by_id(order_id)
        logger.info(
            "Order deleted" if matched else "Order delete matched no rows",
            extra={
                "order_id": order_id,
                "matched": matched,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return matched
