from typing import List

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse

from ..schemas.order import OrderCreate, OrderItemsUpdate, OrderResponse
from ..services.order_service import OrderService
from .deps import OrderServiceDep

router = APIRouter(prefix="/orders")


@router.get("", status_code=status.HTTP_200_OK)
async def list_orders(
    order_service: OrderService = OrderServiceDep,
) -> List[OrderResponse]:
    """List all orders, earliest order date first"""
    orders = await order_service.list_orders()
    return [OrderResponse.model_validate(order) for order in orders]


@router.post("", status_code=status.HTTP_200_OK, response_class=PlainTextResponse)
async def create_order(
    request: Request,
    order_data: OrderCreate,
    order_service: OrderService = OrderServiceDep,
) -> PlainTextResponse:
    """Create an order; the body of the response is its location"""
    order = await order_service.create_order(order_data)
    location = str(request.url_for("get_order", order_id=order.order_id))
    return PlainTextResponse(location, headers={"Location": location})


@router.get("/{order_id}", status_code=status.HTTP_200_OK)
async def get_order(
    order_id: int,
    order_service: OrderService = OrderServiceDep,
) -> OrderResponse:
    """Get order details by ID"""
    order = await order_service.get_order(order_id)
    return OrderResponse.model_validate(order)


@router.put(
    "/{order_id}", status_code=status.HTTP_200_OK, response_class=PlainTextResponse
)
async def update_order(
    order_id: int,
    patch: OrderItemsUpdate,
    order_service: OrderService = OrderServiceDep,
) -> str:
    """Replace the items of an order"""
    await order_service.update_order_items(order_id, patch)
    return "Updated"


@router.delete(
    "/{order_id}", status_code=status.HTTP_200_OK, response_class=PlainTextResponse
)
async def delete_order(
    order_id: int,
    order_service: OrderService = OrderServiceDep,
) -> str:
    """Delete an order"""
    await order_service.delete_order(order_id)
    return "Order has been deleted"
