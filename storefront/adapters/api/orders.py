"""Customer orders client."""

from typing import List

from storefront.infrastructure.http.client import ApiClient

from .schemas.orders import CreateOrderDto, OrderDetailDto, OrderSummaryDto


class OrdersApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def get_orders(self) -> List[OrderSummaryDto]:
        response = await self._client.get("/orders")
        return [OrderSummaryDto.model_validate(item) for item in response.json()]

    async def get_order(self, order_id: str) -> OrderDetailDto:
        response = await self._client.get(f"/orders/{order_id}")
        return OrderDetailDto.model_validate(response.json())

    async def create_order(self, dto: CreateOrderDto) -> OrderDetailDto:
        response = await self._client.post("/orders", json=dto.to_payload())
        return OrderDetailDto.model_validate(response.json())
