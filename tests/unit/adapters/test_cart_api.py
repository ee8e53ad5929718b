import json
import uuid

import pytest

from storefront.adapters.api.cart import CART_SESSION_HEADER, CartApi
from storefront.adapters.api.schemas.cart import AddToCartDto, MergeCartDto, UpdateCartItemDto
from storefront.core.exceptions import ApiError

CART = {
    "items": [
        {
            "productId": "p-1",
            "sku": "DESK-01",
            "name": "Desk",
            "quantity": 2,
            "unitPrice": 100.0,
            "vatRate": 21.0,
            "subtotal": 200.0,
        }
    ],
    "totalItems": 2,
    "subtotal": 200.0,
    "vatAmount": 42.0,
    "total": 242.0,
}


@pytest.fixture
def cart_api(api_client, memory_store):
    return CartApi(api_client, memory_store)


@pytest.mark.asyncio
async def test_session_id_is_created_once(cart_api, memory_store):
    first = await cart_api.ensure_session_id()
    second = await cart_api.ensure_session_id()

    assert first == second
    assert uuid.UUID(first)
    assert await memory_store.get("cart-session-id") == first


@pytest.mark.asyncio
async def test_get_cart_sends_session_header_and_locale(cart_api, backend, signed_in):
    backend.resources["/api/cart"] = CART

    cart = await cart_api.get_cart()

    request = backend.calls_to("/api/cart")[0]
    assert request.headers[CART_SESSION_HEADER] == await cart_api.get_session_id()
    assert request.url.params["locale"] == "es"
    assert cart.total == 242.0
    assert cart.items[0].product_id == "p-1"


@pytest.mark.asyncio
async def test_add_item_posts_payload(cart_api, backend, signed_in):
    backend.resources["/api/cart/items"] = CART

    await cart_api.add_item(AddToCartDto(product_id="p-1", quantity=2), locale="en")

    request = backend.calls_to("/api/cart/items")[0]
    assert request.method == "POST"
    assert request.url.params["locale"] == "en"
    assert json.loads(request.content) == {"productId": "p-1", "quantity": 2}


@pytest.mark.asyncio
async def test_merge_cart_sends_no_session_header(cart_api, backend, signed_in):
    backend.resources["/api/cart/merge"] = CART

    await cart_api.merge_cart(MergeCartDto(session_id="s-1"))

    request = backend.calls_to("/api/cart/merge")[0]
    assert CART_SESSION_HEADER not in request.headers
    assert json.loads(request.content) == {"sessionId": "s-1"}


@pytest.mark.asyncio
async def test_clear_session_id(cart_api, memory_store):
    await cart_api.ensure_session_id()

    await cart_api.clear_session_id()

    assert await cart_api.get_session_id() is None


# ---------------------------------------------------------------------------
# Cart state
# ---------------------------------------------------------------------------

UPDATED_CART = {**CART, "items": [{**CART["items"][0], "quantity": 3, "subtotal": 300.0}], "totalItems": 3}


@pytest.mark.asyncio
async def test_add_item_records_cart_and_last_added_item(cart_api, backend, signed_in):
    backend.resources["/api/cart/items"] = CART

    await cart_api.add_item(AddToCartDto(product_id="p-1", quantity=2))

    assert cart_api.state.cart.total == 242.0
    assert cart_api.state.last_added_item == "Desk"
    assert cart_api.state.is_loading is False
    assert cart_api.state.item_count == 2


@pytest.mark.asyncio
async def test_failed_fetch_sets_error(cart_api, backend, signed_in):
    backend.authorized_errors["/api/cart"] = 500

    with pytest.raises(ApiError):
        await cart_api.get_cart()

    assert cart_api.state.error == "Error loading cart"
    assert cart_api.state.is_loading is False


@pytest.mark.asyncio
async def test_update_item_uses_server_cart(cart_api, backend, signed_in):
    backend.resources["/api/cart"] = CART
    backend.resources["/api/cart/items/p-1"] = UPDATED_CART
    await cart_api.get_cart()

    cart = await cart_api.update_item("p-1", UpdateCartItemDto(quantity=3))

    assert cart.total_items == 3
    assert cart_api.state.cart == cart


@pytest.mark.asyncio
async def test_failed_update_rolls_back_optimistic_change(cart_api, backend, signed_in):
    backend.resources["/api/cart"] = CART
    previous = await cart_api.get_cart()
    backend.authorized_errors["/api/cart/items/p-1"] = 500

    with pytest.raises(ApiError):
        await cart_api.update_item("p-1", UpdateCartItemDto(quantity=5))

    assert cart_api.state.cart == previous
    assert cart_api.state.error == "Error updating item"


@pytest.mark.asyncio
async def test_remove_item_updates_snapshot(cart_api, backend, signed_in):
    backend.resources["/api/cart"] = CART
    await cart_api.get_cart()

    await cart_api.remove_item("p-1")

    assert cart_api.state.cart.items == []
    assert cart_api.state.cart.total == 0


@pytest.mark.asyncio
async def test_failed_clear_restores_cart(cart_api, backend, signed_in):
    backend.resources["/api/cart"] = CART
    previous = await cart_api.get_cart()
    backend.authorized_errors["/api/cart"] = 500

    with pytest.raises(ApiError):
        await cart_api.clear_cart()

    assert cart_api.state.cart == previous


@pytest.mark.asyncio
async def test_merge_session_cart_clears_session_id(cart_api, backend, signed_in):
    backend.resources["/api/cart/merge"] = CART
    session_id = await cart_api.ensure_session_id()

    cart = await cart_api.merge_session_cart()

    assert cart.total_items == 2
    assert json.loads(backend.calls_to("/api/cart/merge")[0].content) == {"sessionId": session_id}
    assert await cart_api.get_session_id() is None
    assert cart_api.state.cart == cart


@pytest.mark.asyncio
async def test_merge_session_cart_without_session_is_skipped(cart_api, backend, signed_in):
    assert await cart_api.merge_session_cart() is None
    assert backend.calls_to("/api/cart/merge") == []


@pytest.mark.asyncio
async def test_failed_merge_keeps_session_and_state(cart_api, backend, signed_in):
    backend.authorized_errors["/api/cart/merge"] = 500
    session_id = await cart_api.ensure_session_id()

    assert await cart_api.merge_session_cart() is None

    assert await cart_api.get_session_id() == session_id
    assert cart_api.state.cart is None
