"""Payload models for the ``/cart`` endpoints."""

from typing import List, Optional

from pydantic import Field

from .base import ApiModel


class CartItemDto(ApiModel):
    product_id: str
    sku: str
    name: str
    image_url: Optional[str] = None
    quantity: int
    unit_price: float
    vat_rate: float
    subtotal: float


class CartDto(ApiModel):
    items: List[CartItemDto] = Field(default_factory=list)
    total_items: int = 0
    subtotal: float = 0
    vat_amount: float = 0
    total: float = 0

    @classmethod
    def from_items(cls, items: List[CartItemDto]) -> "CartDto":
        """Recompute the totals locally; VAT and total are rounded to cents."""
        subtotal = sum(item.subtotal for item in items)
        vat_amount = round(sum(item.subtotal * item.vat_rate / 100 for item in items), 2)
        return cls(
            items=items,
            total_items=sum(item.quantity for item in items),
            subtotal=subtotal,
            vat_amount=vat_amount,
            total=round(subtotal + vat_amount, 2),
        )

    def with_quantity(self, product_id: str, quantity: int) -> "CartDto":
        items = [
            item.model_copy(update={"quantity": quantity, "subtotal": round(item.unit_price * quantity, 2)})
            if item.product_id == product_id
            else item
            for item in self.items
        ]
        return CartDto.from_items(items)

    def without_item(self, product_id: str) -> "CartDto":
        return CartDto.from_items([item for item in self.items if item.product_id != product_id])


class AddToCartDto(ApiModel):
    product_id: str
    quantity: int = Field(ge=1)
    # Components chosen in the product configurator.
    selected_component_ids: Optional[List[str]] = None


class UpdateCartItemDto(ApiModel):
    quantity: int = Field(ge=1)


class MergeCartDto(ApiModel):
    session_id: str
