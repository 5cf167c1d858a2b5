"""
HTTP client for the orders REST API, used by the HTML front end.
"""

import time
from typing import Any, List, Optional

import httpx

from ..core.exceptions import OrderNotFoundError, OrdersApiError
from ..schemas.order import OrderCreate, OrderItemsUpdate, OrderResponse
from ..utils.logging import get_order_logger

logger = get_order_logger("orders_api_client")


class OrdersApiClient:
    """Thin async wrapper over ``/orders``"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close HTTP client"""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        order_id: Optional[int] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        start_time = time.time()
        try:
            response = await self.http_client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(
                "Orders API request failed",
                extra={
                    "method": method,
                    "path": path,
                    "error_type": type(exc).__name__,
                },
            )
            raise OrdersApiError(f"Orders API unreachable: {exc}") from exc

        logger.info(
            "Orders API request completed",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "response_time": round(time.time() - start_time, 4),
            },
        )

        if response.status_code == 404 and order_id is not None:
            raise OrderNotFoundError(order_id)
        if response.is_error:
            raise OrdersApiError(
                f"Orders API returned {response.status_code} for {method} {path}",
                status_code=response.status_code,
            )
        return response

    async def list_orders(self) -> List[OrderResponse]:
        response = await self._request("GET", "/orders")
        return [OrderResponse.model_validate(item) for item in response.json()]

    async def create_order(self, order: OrderCreate) -> str:
        """POST the order; returns the location string sent back by the API"""
        response = await self._request(
            "POST", "/orders", json=order.model_dump(mode="json", by_alias=True)
        )
        return response.text

    async def get_order(self, order_id: int) -> OrderResponse:
        response = await self._request("GET", f"/orders/{order_id}", order_id=order_id)
        return OrderResponse.model_validate(response.json())

    async def update_order_items(self, order_id: int, patch: OrderItemsUpdate) -> str:
        response = await self._request(
            "PUT",
            f"/orders/{order_id}",
            order_id=order_id,
            json=patch.model_dump(mode="json", by_alias=True),
        )
        return response.text

    async def delete_order(self, order_id: int) -> str:
        response = await self._request("DELETE", f"/orders/{order_id}")
        return response.text
