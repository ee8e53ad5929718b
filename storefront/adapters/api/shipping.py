"""Shipping cost client. The cost itself is computed by the backend."""

from typing import List

from storefront.infrastructure.http.client import ApiClient

from .schemas.shipping import CalculateShippingRequestDto, ShippingCalculationDto, ShippingZoneDto


class ShippingApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def calculate(self, dto: CalculateShippingRequestDto) -> ShippingCalculationDto:
        response = await self._client.post("/shipping/calculate", json=dto.to_payload())
        return ShippingCalculationDto.model_validate(response.json())

    async def get_zones(self) -> List[ShippingZoneDto]:
        response = await self._client.get("/shipping/zones")
        return [ShippingZoneDto.model_validate(zone) for zone in response.json()]
