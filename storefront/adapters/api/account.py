"""Customer account clients: addresses and communication preferences."""

from typing import List, Optional

from storefront.core.exceptions import NotFoundError
from storefront.infrastructure.http.client import ApiClient

from .schemas.account import (
    BillingAddressDetailDto,
    CommunicationPreferences,
    CreateBillingAddressDto,
    CreateDeliveryAddressDto,
    DeliveryAddressDetailDto,
    UpdateBillingAddressDto,
    UpdateDeliveryAddressDto,
)


class AddressesApi:
    """Billing address (one per customer) and delivery addresses (many)."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def get_billing_address(self) -> Optional[BillingAddressDetailDto]:
        """Return the billing address, or ``None`` when the customer has none yet."""
        try:
            response = await self._client.get("/addresses/billing")
        except NotFoundError:
            return None
        return BillingAddressDetailDto.model_validate(response.json())

    async def get_delivery_addresses(self) -> List[DeliveryAddressDetailDto]:
        try:
            response = await self._client.get("/addresses/delivery")
        except NotFoundError:
            return []
        return [DeliveryAddressDetailDto.model_validate(item) for item in response.json()]

    async def create_billing_address(self, dto: CreateBillingAddressDto) -> BillingAddressDetailDto:
        response = await self._client.post("/addresses/billing", json=dto.to_payload())
        return BillingAddressDetailDto.model_validate(response.json())

    async def create_delivery_address(self, dto: CreateDeliveryAddressDto) -> DeliveryAddressDetailDto:
        response = await self._client.post("/addresses/delivery", json=dto.to_payload())
        return DeliveryAddressDetailDto.model_validate(response.json())

    async def update_billing_address(self, dto: UpdateBillingAddressDto) -> BillingAddressDetailDto:
        response = await self._client.put("/addresses/billing", json=dto.to_payload())
        return BillingAddressDetailDto.model_validate(response.json())

    async def update_delivery_address(self, address_id: str, dto: UpdateDeliveryAddressDto) -> DeliveryAddressDetailDto:
        response = await self._client.put(f"/addresses/delivery/{address_id}", json=dto.to_payload())
        return DeliveryAddressDetailDto.model_validate(response.json())

    async def delete_delivery_address(self, address_id: str) -> None:
        await self._client.delete(f"/addresses/delivery/{address_id}")


class CommunicationPreferencesApi:
    """Newsletter and notification opt-ins. The backend creates defaults on first read."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def get_preferences(self) -> CommunicationPreferences:
        response = await self._client.get("/communication-preferences")
        return CommunicationPreferences.model_validate(response.json())

    async def update_preferences(self, preferences: CommunicationPreferences) -> CommunicationPreferences:
        response = await self._client.put("/communication-preferences", json=preferences.to_payload())
        return CommunicationPreferences.model_validate(response.json())
