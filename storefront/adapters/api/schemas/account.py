"""Payload models for the customer account: addresses and preferences."""

from .base import ApiModel


class BillingAddressDetailDto(ApiModel):
    id: str
    street: str
    city: str
    state: str
    country: str
    postal_code: str


class DeliveryAddressDetailDto(ApiModel):
    id: str
    name: str
    street: str
    city: str
    state: str
    country: str
    postal_code: str
    is_default: bool


class CreateBillingAddressDto(ApiModel):
    user_id: str
    street: str
    city: str
    state: str
    country: str
    postal_code: str


class UpdateBillingAddressDto(ApiModel):
    street: str
    city: str
    state: str
    country: str
    postal_code: str


class CreateDeliveryAddressDto(ApiModel):
    user_id: str
    name: str
    street: str
    city: str
    state: str
    country: str
    postal_code: str
    is_default: bool = False


class UpdateDeliveryAddressDto(ApiModel):
    name: str
    street: str
    city: str
    state: str
    country: str
    postal_code: str
    is_default: bool = False


class CommunicationPreferences(ApiModel):
    newsletter: bool = False
    order_notifications: bool = False
    sms_promotions: bool = False
