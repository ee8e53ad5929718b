"""Asynchronous client for the SimRacing storefront API."""

from storefront.core.application import StorefrontClient, create_storefront_client
from storefront.core.exceptions import (
    ApiError,
    NotFoundError,
    StorefrontError,
    TokenRefreshError,
    TransportError,
    UnauthorizedError,
)

__all__ = [
    "ApiError",
    "NotFoundError",
    "StorefrontClient",
    "StorefrontError",
    "TokenRefreshError",
    "TransportError",
    "UnauthorizedError",
    "create_storefront_client",
]

__version__ = "0.1.0"
