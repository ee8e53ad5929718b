"""Payload models for the ``/shipping`` endpoints."""

from typing import Optional

from .base import ApiModel


class CalculateShippingRequestDto(ApiModel):
    postal_code: str
    subtotal: float
    weight_kg: float


class ShippingCalculationDto(ApiModel):
    zone_name: str
    base_cost: float
    weight_cost: float
    total_cost: float
    weight_kg: float
    is_free_shipping: bool
    free_shipping_threshold: float
    subtotal_needed_for_free_shipping: float


class ShippingZoneDto(ApiModel):
    name: str
    base_cost: float
    cost_per_kg: float
    free_shipping_threshold: Optional[float] = None
