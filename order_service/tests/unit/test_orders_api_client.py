import json
from datetime import date

import httpx
import pytest

from order_service.app.clients.orders_api import OrdersApiClient
from order_service.app.core.exceptions import OrderNotFoundError, OrdersApiError
from order_service.app.schemas.order import OrderItemsUpdate

ORDER_JSON = {
    "orderId": 1,
    "items": "Widget",
    "orderDate": "2023-01-01",
    "orderTime": "10:00:00",
    "quantity": 5,
    "onHand": True,
}


class TestOrdersApiClient:
    """OrdersApiClient against a mocked transport."""

    @pytest.fixture
    def requests_seen(self):
        return []

    def make_client(self, requests_seen, handler):
        def record(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        return OrdersApiClient(
            base_url="http://orders.test/", transport=httpx.MockTransport(record)
        )

    @pytest.mark.asyncio
    async def test_list_orders(self, requests_seen):
        client = self.make_client(
            requests_seen, lambda request: httpx.Response(200, json=[ORDER_JSON])
        )

        orders = await client.list_orders()

        assert len(orders) == 1
        assert orders[0].order_id == 1
        assert orders[0].order_date == date(2023, 1, 1)
        assert str(requests_seen[0].url) == "http://orders.test/orders"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_create_order_sends_camel_case_json(
        self, requests_seen, sample_order
    ):
        client = self.make_client(
            requests_seen,
            lambda request: httpx.Response(200, text="http://orders.test/orders/1"),
        )

        location = await client.create_order(sample_order)

        assert location == "http://orders.test/orders/1"
        request = requests_seen[0]
        assert request.method == "POST"
        assert json.loads(request.content) == {
            "items": "Widget",
            "orderDate": "2023-01-01",
            "orderTime": "10:00:00",
            "quantity": 5,
            "onHand": True,
        }
        await client.aclose()

    @pytest.mark.asyncio
    async def test_get_order_404_raises_not_found(self, requests_seen):
        client = self.make_client(
            requests_seen, lambda request: httpx.Response(404, json={"error": {}})
        )

        with pytest.raises(OrderNotFoundError) as exc_info:
            await client.get_order(9)

        assert exc_info.value.order_id == 9
        await client.aclose()

    @pytest.mark.asyncio
    async def test_update_order_items_sends_only_items(self, requests_seen):
        client = self.make_client(
            requests_seen, lambda request: httpx.Response(200, text="Updated")
        )

        result = await client.update_order_items(1, OrderItemsUpdate(items="X"))

        assert result == "Updated"
        assert requests_seen[0].method == "PUT"
        assert requests_seen[0].url.path == "/orders/1"
        assert json.loads(requests_seen[0].content) == {"items": "X"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_delete_order(self, requests_seen):
        client = self.make_client(
            requests_seen,
            lambda request: httpx.Response(200, text="Order has been deleted"),
        )

        assert await client.delete_order(3) == "Order has been deleted"
        assert requests_seen[0].method == "DELETE"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_server_error_raises_api_error(self, requests_seen):
        client = self.make_client(
            requests_seen, lambda request: httpx.Response(500, json={"error": {}})
        )

        with pytest.raises(OrdersApiError) as exc_info:
            await client.list_orders()

        assert exc_info.value.status_code == 500
        await client.aclose()

    @pytest.mark.asyncio
    async def test_transport_failure_raises_api_error(self, requests_seen):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = self.make_client(requests_seen, refuse)

        with pytest.raises(OrdersApiError) as exc_info:
            await client.list_orders()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        await client.aclose()
