"""Resource clients of the storefront API."""

from .account import AddressesApi, CommunicationPreferencesApi
from .auth import AuthApi
from .cart import CART_SESSION_HEADER, CartApi
from .catalog import CategoriesApi, ProductsApi, group_customizations
from .orders import OrdersApi
from .shipping import ShippingApi

__all__ = [
    "AddressesApi",
    "AuthApi",
    "CART_SESSION_HEADER",
    "CartApi",
    "CategoriesApi",
    "CommunicationPreferencesApi",
    "OrdersApi",
    "ProductsApi",
    "ShippingApi",
    "group_customizations",
]
