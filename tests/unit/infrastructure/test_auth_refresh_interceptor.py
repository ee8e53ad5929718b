"""Behaviour of the HTTP client's bearer and refresh interceptors."""

import asyncio

import httpx
import pytest

from storefront.core.exceptions import ApiError, TokenRefreshError, TransportError, UnauthorizedError
from storefront.domain.value_objects.credentials import CredentialPair
from storefront.infrastructure.http.client import ApiClient
from storefront.infrastructure.http.interceptors import is_auth_endpoint
from storefront.infrastructure.storage.key_value import NullKeyValueStore
from storefront.infrastructure.storage.token_store import TokenStore
from tests.utils.fakes import BASE_URL, wait_until


# ---------------------------------------------------------------------------
# Outbound bearer header
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_request_carries_stored_access_token(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t2", refresh_token="r2"))

    response = await api_client.get("/products")

    assert response.json() == {"id": 1}
    assert backend.requests[0].headers["Authorization"] == "Bearer t2"


@pytest.mark.asyncio
async def test_request_without_stored_token_has_no_authorization_header(api_client, backend):
    await api_client.get("/products/featured")

    assert "Authorization" not in backend.requests[0].headers


# ---------------------------------------------------------------------------
# Scenario A: single expired request
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_single_401_is_refreshed_and_replayed(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))

    response = await api_client.get("/products")

    assert response.status_code == 200
    assert response.json() == {"id": 1}
    assert backend.refresh_calls == 1
    assert backend.refresh_payloads == [{"refreshToken": "r1"}]
    assert await token_store.get() == CredentialPair(access_token="t2", refresh_token="r2")

    product_calls = backend.calls_to("/api/products")
    assert [call.headers["Authorization"] for call in product_calls] == ["Bearer t1", "Bearer t2"]


@pytest.mark.asyncio
async def test_refresh_request_carries_no_bearer_token(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))

    await api_client.get("/products")

    refresh_call = backend.calls_to("/api/auth/refresh")[0]
    assert "Authorization" not in refresh_call.headers


# ---------------------------------------------------------------------------
# Scenario B: concurrent expired requests share one refresh
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_concurrent_401s_trigger_exactly_one_refresh(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.refresh_gate = asyncio.Event()

    async def release_refresh():
        await wait_until(lambda: api_client.coordinator.waiter_count == 2)
        backend.refresh_gate.set()

    _, cart, orders, profile = await asyncio.gather(
        release_refresh(),
        api_client.get("/cart"),
        api_client.get("/orders"),
        api_client.get("/profile"),
    )

    assert backend.refresh_calls == 1
    assert cart.json()["totalItems"] == 0
    assert orders.json() == []
    assert profile.json() == {"name": "profile"}
    for path in ("/api/cart", "/api/orders", "/api/profile"):
        calls = backend.calls_to(path)
        assert [call.headers["Authorization"] for call in calls] == ["Bearer t1", "Bearer t2"]
    assert api_client.coordinator.in_progress is False
    assert api_client.coordinator.waiter_count == 0


@pytest.mark.asyncio
async def test_concurrent_401s_all_receive_refresh_error(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.refresh_status = 500
    backend.refresh_body = {"message": "refresh store down"}
    backend.refresh_gate = asyncio.Event()

    async def release_refresh():
        await wait_until(lambda: api_client.coordinator.waiter_count == 2)
        backend.refresh_gate.set()

    results = await asyncio.gather(
        api_client.get("/cart"),
        api_client.get("/orders"),
        api_client.get("/profile"),
        release_refresh(),
        return_exceptions=True,
    )

    errors = results[:3]
    assert backend.refresh_calls == 1
    assert all(isinstance(error, ApiError) for error in errors)
    assert all(error.status_code == 500 and error.path == "/api/auth/refresh" for error in errors)
    assert await token_store.get() is None
    # Nobody was replayed with a stale or missing token.
    assert len(backend.calls_to("/api/cart")) == 1


@pytest.mark.asyncio
async def test_new_refresh_can_start_after_previous_cycle(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    await api_client.get("/products")

    backend.valid_tokens = {"t3"}
    backend.refresh_body = {"token": "t3", "refreshToken": "r3"}
    response = await api_client.get("/products")

    assert response.json() == {"id": 1}
    assert backend.refresh_calls == 2
    assert backend.refresh_payloads[1] == {"refreshToken": "r2"}
    assert api_client.coordinator.refresh_count == 2


# ---------------------------------------------------------------------------
# Scenario C: no refresh token stored
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_missing_refresh_token_clears_credentials_and_raises_original_401(
    api_client, backend, memory_store, token_store
):
    await memory_store.set(token_store.access_key, "t1")

    with pytest.raises(UnauthorizedError) as exc_info:
        await api_client.get("/cart")

    assert exc_info.value.path == "/api/cart"
    assert backend.refresh_calls == 0
    assert await token_store.get_access_token() is None
    assert api_client.coordinator.in_progress is False


# ---------------------------------------------------------------------------
# Scenario D: refresh endpoint rejects the refresh token
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_refresh_401_clears_credentials_and_raises_refresh_error(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.refresh_status = 401
    backend.refresh_body = {"message": "Refresh token revoked"}

    with pytest.raises(UnauthorizedError) as exc_info:
        await api_client.get("/orders")

    assert exc_info.value.path == "/api/auth/refresh"
    assert "Refresh token revoked" in str(exc_info.value)
    assert await token_store.get() is None
    assert backend.refresh_calls == 1
    assert len(backend.calls_to("/api/orders")) == 1


@pytest.mark.asyncio
async def test_malformed_refresh_body_is_a_refresh_error(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.refresh_body = {"token": "t2"}

    with pytest.raises(TokenRefreshError):
        await api_client.get("/orders")

    assert await token_store.get() is None


@pytest.mark.asyncio
async def test_unreachable_refresh_endpoint_is_terminal(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.transport_failures["/api/auth/refresh"] = httpx.ConnectError

    with pytest.raises(TransportError):
        await api_client.get("/orders")

    assert await token_store.get() is None


# ---------------------------------------------------------------------------
# Scenario E and other non-refreshable failures
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_login_401_is_not_refreshed(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.login_status = 401

    with pytest.raises(UnauthorizedError) as exc_info:
        await api_client.post("/auth/login", json={"email": "a@b.c", "password": "x"})

    assert exc_info.value.path == "/api/auth/login"
    assert backend.refresh_calls == 0
    assert await token_store.get() == CredentialPair(access_token="t1", refresh_token="r1")


@pytest.mark.asyncio
async def test_replayed_request_failing_again_is_not_refreshed_twice(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.valid_tokens = set()

    with pytest.raises(UnauthorizedError) as exc_info:
        await api_client.get("/products")

    assert exc_info.value.path == "/api/products"
    assert backend.refresh_calls == 1
    assert len(backend.calls_to("/api/products")) == 2


@pytest.mark.asyncio
async def test_replay_outcome_is_returned_even_when_it_is_a_new_error(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.authorized_errors["/api/products"] = 404

    with pytest.raises(ApiError) as exc_info:
        await api_client.get("/products")

    assert exc_info.value.status_code == 404
    assert backend.refresh_calls == 1


@pytest.mark.asyncio
async def test_non_401_error_propagates_without_refresh(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.errors["/api/orders"] = 500

    with pytest.raises(ApiError) as exc_info:
        await api_client.get("/orders")

    assert exc_info.value.status_code == 500
    assert exc_info.value.payload == {"message": "boom"}
    assert backend.refresh_calls == 0


@pytest.mark.asyncio
async def test_transport_error_propagates_without_refresh(api_client, backend, token_store):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.transport_failures["/api/orders"] = httpx.ConnectError

    with pytest.raises(TransportError) as exc_info:
        await api_client.get("/orders")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert backend.refresh_calls == 0


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/api/auth/login", True),
        ("/api/auth/register", True),
        ("/api/auth/refresh", True),
        ("/api/auth/logout", False),
        ("/api/products", False),
        (None, False),
    ],
)
def test_is_auth_endpoint(path, expected):
    assert is_auth_endpoint(path) is expected


# ---------------------------------------------------------------------------
# Refresh failures outside the HTTP status path
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize("error_cls", [httpx.DecodingError, httpx.TooManyRedirects, httpx.ReadTimeout])
async def test_refresh_request_error_clears_credentials(api_client, backend, token_store, error_cls):
    await token_store.set(CredentialPair(access_token="t1", refresh_token="r1"))
    backend.transport_failures["/api/auth/refresh"] = error_cls

    with pytest.raises(TransportError) as exc_info:
        await api_client.get("/orders")

    assert isinstance(exc_info.value.__cause__, error_cls)
    assert await token_store.get() is None
    assert api_client.coordinator.in_progress is False


class SlowRefreshTokenStore(TokenStore):
    """Token store whose refresh-token read blocks until ``gate`` is set."""

    def __init__(self, store):
        super().__init__(store)
        self.gate = asyncio.Event()

    async def get_refresh_token(self):
        await self.gate.wait()
        return await super().get_refresh_token()


@pytest.mark.asyncio
async def test_waiters_behind_missing_refresh_token_receive_the_same_401(backend, memory_store):
    token_store = SlowRefreshTokenStore(memory_store)
    await memory_store.set(token_store.access_key, "t1")

    async with ApiClient(BASE_URL, token_store=token_store, transport=httpx.MockTransport(backend)) as client:

        async def release_refresh():
            await wait_until(lambda: client.coordinator.waiter_count == 2)
            token_store.gate.set()

        results = await asyncio.gather(
            client.get("/cart"),
            client.get("/orders"),
            client.get("/profile"),
            release_refresh(),
            return_exceptions=True,
        )

    errors = results[:3]
    assert isinstance(errors[0], UnauthorizedError)
    assert errors[0].path == "/api/cart"
    assert errors[1] is errors[0]
    assert errors[2] is errors[0]
    assert backend.refresh_calls == 0
    assert await memory_store.get(token_store.access_key) is None
    assert client.coordinator.in_progress is False


# ---------------------------------------------------------------------------
# Storage-less context
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_storage_less_client_sends_no_bearer_and_never_refreshes(backend):
    token_store = TokenStore(NullKeyValueStore())
    await token_store.set(CredentialPair(access_token="t2", refresh_token="r2"))

    async with ApiClient(BASE_URL, token_store=token_store, transport=httpx.MockTransport(backend)) as client:
        featured = await client.get("/products/featured")
        with pytest.raises(UnauthorizedError) as exc_info:
            await client.get("/orders")

    assert featured.status_code == 200
    assert exc_info.value.path == "/api/orders"
    assert all("Authorization" not in request.headers for request in backend.requests)
    assert backend.refresh_calls == 0
    assert len(backend.calls_to("/api/orders")) == 1
