"""Client composition.

`create_storefront_client` wires the storage backend, the HTTP client and
every resource client from a `Settings` instance, the way the service
factory of a web app wires its routers and middleware.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from storefront.adapters.api.account import AddressesApi, CommunicationPreferencesApi
from storefront.adapters.api.auth import AuthApi
from storefront.adapters.api.cart import CartApi
from storefront.adapters.api.catalog import CategoriesApi, ProductsApi
from storefront.adapters.api.orders import OrdersApi
from storefront.adapters.api.schemas.auth import AuthResponseDto, LoginDto
from storefront.adapters.api.shipping import ShippingApi
from storefront.core.config.settings import Settings
from storefront.core.config.settings import settings as default_settings
from storefront.core.logging import logger
from storefront.domain.entities.auth_state import AuthState
from storefront.domain.entities.cart_state import CartState
from storefront.domain.interfaces.storage import IKeyValueStore
from storefront.infrastructure.http.client import ApiClient
from storefront.infrastructure.storage.key_value import create_key_value_store
from storefront.infrastructure.storage.token_store import TokenStore


@dataclass
class StorefrontClient:
    """Every storefront resource client, sharing one HTTP client and one store."""

    http: ApiClient
    store: IKeyValueStore
    token_store: TokenStore
    auth: AuthApi
    cart: CartApi
    orders: OrdersApi
    shipping: ShippingApi
    products: ProductsApi
    categories: CategoriesApi
    addresses: AddressesApi
    communication_preferences: CommunicationPreferencesApi

    @property
    def auth_state(self) -> AuthState:
        return self.auth.state

    @property
    def cart_state(self) -> CartState:
        return self.cart.state

    async def sign_in(self, dto: LoginDto, locale: Optional[str] = None) -> AuthResponseDto:
        """Log in, then move the anonymous cart into the customer's cart."""
        response = await self.auth.login(dto)
        await self.cart.merge_session_cart(locale)
        return response

    async def sign_out(self) -> None:
        await self.auth.logout()
        self.cart.state.reset()

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, exc_type, exc_val, traceback) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()
        await self.store.aclose()
        logger.debug("storefront_client_closed")


def create_storefront_client(
    settings: Optional[Settings] = None,
    *,
    store: Optional[IKeyValueStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> StorefrontClient:
    """Build a `StorefrontClient`.

    Args:
        settings: Configuration; the module-level settings when omitted.
        store: Key-value store to use instead of the configured backend.
        transport: httpx transport override, e.g. ``httpx.MockTransport``.

    Returns:
        StorefrontClient: Ready to use; close it with ``aclose`` or ``async with``.
    """
    settings = settings or default_settings
    store = store if store is not None else create_key_value_store(settings)
    token_store = TokenStore(
        store,
        access_key=settings.ACCESS_TOKEN_KEY,
        refresh_key=settings.REFRESH_TOKEN_KEY,
    )
    http = ApiClient.from_settings(settings, token_store, transport=transport)

    logger.info(
        "storefront_client_created",
        api_url=settings.API_URL,
        env=settings.APP_ENV,
        token_store_backend=type(store).__name__,
    )
    return StorefrontClient(
        http=http,
        store=store,
        token_store=token_store,
        auth=AuthApi(http, token_store),
        cart=CartApi(
            http,
            store,
            session_key=settings.CART_SESSION_KEY,
            default_locale=settings.DEFAULT_LOCALE,
        ),
        orders=OrdersApi(http),
        shipping=ShippingApi(http),
        products=ProductsApi(http),
        categories=CategoriesApi(http),
        addresses=AddressesApi(http),
        communication_preferences=CommunicationPreferencesApi(http),
    )
