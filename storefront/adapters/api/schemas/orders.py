"""Payload models for the ``/orders`` endpoints."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .base import ApiModel

OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]


class OrderItemSummaryDto(ApiModel):
    id: str
    product_name: str
    product_sku: str
    quantity: int
    line_total: float


class OrderSummaryDto(ApiModel):
    id: str
    order_number: str
    total_amount: float
    order_status: OrderStatus
    created_at: datetime
    items: List[OrderItemSummaryDto] = Field(default_factory=list)


class OrderItemDetailDto(ApiModel):
    id: str
    product_id: Optional[str] = None
    product_name: str
    product_sku: str
    configuration_json: Optional[str] = None
    quantity: int
    unit_price: float
    line_total: float


class OrderDetailDto(ApiModel):
    id: str
    order_number: str
    user_id: Optional[str] = None
    shipping_street: str
    shipping_city: str
    shipping_state: Optional[str] = None
    shipping_postal_code: str
    shipping_country: str = "ES"
    payment_id: Optional[str] = None
    subtotal: float
    vat_amount: float
    shipping_cost: float
    total_amount: float
    order_status: OrderStatus = "pending"
    estimated_production_days: Optional[int] = None
    production_notes: Optional[str] = None
    tracking_number: Optional[str] = None
    shipped_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    order_items: List[OrderItemDetailDto] = Field(default_factory=list)


class CreateOrderItemDto(ApiModel):
    product_id: str
    product_name: str
    product_sku: str
    configuration_json: Optional[str] = None
    quantity: int = Field(ge=1)
    unit_price: float
    line_total: float


class CreateOrderDto(ApiModel):
    shipping_street: str
    shipping_city: str
    shipping_state: Optional[str] = None
    shipping_postal_code: str
    shipping_country: str = "ES"
    subtotal: float
    vat_amount: float
    shipping_cost: float
    total_amount: float
    notes: Optional[str] = None
    order_items: List[CreateOrderItemDto] = Field(default_factory=list)
