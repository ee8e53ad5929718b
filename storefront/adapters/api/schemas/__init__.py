"""Pydantic payload models of the storefront API."""

from .account import (
    BillingAddressDetailDto,
    CommunicationPreferences,
    CreateBillingAddressDto,
    CreateDeliveryAddressDto,
    DeliveryAddressDetailDto,
    UpdateBillingAddressDto,
    UpdateDeliveryAddressDto,
)
from .auth import (
    AuthResponseDto,
    ForgotPasswordDto,
    LoginDto,
    RefreshTokenDto,
    RegisterDto,
    ResetPasswordDto,
    UserDto,
)
from .base import ApiModel, PaginatedResult
from .cart import AddToCartDto, CartDto, CartItemDto, MergeCartDto, UpdateCartItemDto
from .catalog import (
    CategoryDetail,
    CategoryFilter,
    CategoryListItem,
    ComponentOptionDto,
    CustomizationGroup,
    CustomizationOption,
    ProductDetail,
    ProductFilter,
    ProductListItem,
)
from .orders import CreateOrderDto, CreateOrderItemDto, OrderDetailDto, OrderSummaryDto
from .shipping import CalculateShippingRequestDto, ShippingCalculationDto, ShippingZoneDto

__all__ = [
    "AddToCartDto",
    "ApiModel",
    "AuthResponseDto",
    "BillingAddressDetailDto",
    "CalculateShippingRequestDto",
    "CartDto",
    "CartItemDto",
    "CategoryDetail",
    "CategoryFilter",
    "CategoryListItem",
    "CommunicationPreferences",
    "ComponentOptionDto",
    "CreateBillingAddressDto",
    "CreateDeliveryAddressDto",
    "CreateOrderDto",
    "CreateOrderItemDto",
    "CustomizationGroup",
    "CustomizationOption",
    "DeliveryAddressDetailDto",
    "ForgotPasswordDto",
    "LoginDto",
    "MergeCartDto",
    "OrderDetailDto",
    "OrderSummaryDto",
    "PaginatedResult",
    "ProductDetail",
    "ProductFilter",
    "ProductListItem",
    "RefreshTokenDto",
    "RegisterDto",
    "ResetPasswordDto",
    "ShippingCalculationDto",
    "ShippingZoneDto",
    "UpdateBillingAddressDto",
    "UpdateCartItemDto",
    "UpdateDeliveryAddressDto",
    "UserDto",
]
