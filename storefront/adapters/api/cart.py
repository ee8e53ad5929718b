"""Shopping cart client.

Anonymous carts are identified by a session id kept in the key-value store
and sent as ``X-Cart-Session``. The backend ignores it for signed-in
customers; ``merge_cart`` moves an anonymous cart into the customer's cart.

Every operation updates the client's `CartState`. Quantity changes, removals
and clearing are applied to the snapshot first and rolled back when the
server call fails; the error is still raised to the caller.
"""

import uuid
from typing import Dict, Optional

import structlog

from storefront.core.exceptions import StorefrontError
from storefront.domain.entities.cart_state import CartState
from storefront.domain.interfaces.storage import IKeyValueStore
from storefront.infrastructure.http.client import ApiClient

from .schemas.cart import AddToCartDto, CartDto, MergeCartDto, UpdateCartItemDto

logger = structlog.get_logger(__name__)

CART_SESSION_HEADER = "X-Cart-Session"
DEFAULT_CART_SESSION_KEY = "cart-session-id"


class CartApi:
    def __init__(
        self,
        client: ApiClient,
        store: IKeyValueStore,
        session_key: str = DEFAULT_CART_SESSION_KEY,
        default_locale: str = "es",
        state: Optional[CartState] = None,
    ):
        self._client = client
        self._store = store
        self._session_key = session_key
        self._default_locale = default_locale
        self.state = state or CartState()

    async def get_session_id(self) -> Optional[str]:
        return await self._store.get(self._session_key)

    async def ensure_session_id(self) -> str:
        """Return the stored session id, creating one on first use."""
        existing = await self._store.get(self._session_key)
        if existing:
            return existing
        new_id = str(uuid.uuid4())
        await self._store.set(self._session_key, new_id)
        return new_id

    async def clear_session_id(self) -> None:
        await self._store.delete(self._session_key)

    async def get_cart(self, locale: Optional[str] = None) -> CartDto:
        self.state.start_loading()
        try:
            response = await self._client.get(
                "/cart", params=self._locale(locale), headers=await self._session_headers()
            )
        except StorefrontError:
            self.state.fail("Error loading cart")
            raise
        cart = CartDto.model_validate(response.json())
        self.state.set_cart(cart)
        return cart

    async def add_item(self, dto: AddToCartDto, locale: Optional[str] = None) -> CartDto:
        self.state.start_loading()
        try:
            response = await self._client.post(
                "/cart/items",
                json=dto.to_payload(),
                params=self._locale(locale),
                headers=await self._session_headers(),
            )
        except StorefrontError:
            self.state.fail("Error adding item")
            raise
        cart = CartDto.model_validate(response.json())
        self.state.set_cart(cart)
        self.state.last_added_item = next(
            (item.name for item in cart.items if item.product_id == dto.product_id), None
        )
        return cart

    async def update_item(self, product_id: str, dto: UpdateCartItemDto, locale: Optional[str] = None) -> CartDto:
        previous = self.state.cart
        if previous is not None:
            self.state.cart = previous.with_quantity(product_id, dto.quantity)
        try:
            response = await self._client.put(
                f"/cart/items/{product_id}",
                json=dto.to_payload(),
                params=self._locale(locale),
                headers=await self._session_headers(),
            )
        except StorefrontError:
            self.state.fail("Error updating item", previous, rollback=True)
            raise
        cart = CartDto.model_validate(response.json())
        self.state.set_cart(cart)
        return cart

    async def remove_item(self, product_id: str) -> None:
        previous = self.state.cart
        if previous is not None:
            self.state.cart = previous.without_item(product_id)
        try:
            await self._client.delete(f"/cart/items/{product_id}", headers=await self._session_headers())
        except StorefrontError:
            self.state.fail("Error removing item", previous, rollback=True)
            raise

    async def clear_cart(self) -> None:
        previous = self.state.cart
        self.state.cart = CartDto()
        try:
            await self._client.delete("/cart", headers=await self._session_headers())
        except StorefrontError:
            self.state.fail("Error clearing cart", previous, rollback=True)
            raise

    async def merge_cart(self, dto: MergeCartDto, locale: Optional[str] = None) -> CartDto:
        response = await self._client.post("/cart/merge", json=dto.to_payload(), params=self._locale(locale))
        cart = CartDto.model_validate(response.json())
        self.state.set_cart(cart)
        return cart

    async def merge_session_cart(self, locale: Optional[str] = None) -> Optional[CartDto]:
        """Merge the stored anonymous cart into the signed-in customer's cart.

        Returns ``None`` when there is no anonymous session or the merge fails;
        a failed merge leaves the session id and the cart state untouched.
        """
        session_id = await self.get_session_id()
        if not session_id:
            return None
        try:
            cart = await self.merge_cart(MergeCartDto(session_id=session_id), locale)
        except StorefrontError as exc:
            logger.warning("cart_merge_failed", error_code=exc.code, error_message=exc.message)
            return None
        await self.clear_session_id()
        logger.info("cart_merged", items=cart.total_items)
        return cart

    async def _session_headers(self) -> Dict[str, str]:
        return {CART_SESSION_HEADER: await self.ensure_session_id()}

    def _locale(self, locale: Optional[str]) -> Dict[str, str]:
        return {"locale": locale or self._default_locale}
