"""HTTP client of the storefront API."""

from .client import ApiClient
from .interceptors import (
    DEFAULT_AUTH_ENDPOINTS,
    AuthRefreshInterceptor,
    BearerTokenInterceptor,
    is_auth_endpoint,
)

__all__ = [
    "ApiClient",
    "AuthRefreshInterceptor",
    "BearerTokenInterceptor",
    "DEFAULT_AUTH_ENDPOINTS",
    "is_auth_endpoint",
]
