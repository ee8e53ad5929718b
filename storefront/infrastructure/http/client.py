"""Asynchronous HTTP client for the storefront API.

`ApiClient` wraps an `httpx.AsyncClient` with a small interceptor pipeline:

    caller -> BearerTokenInterceptor -> send -> (failure) AuthRefreshInterceptor -> replay

Successful responses (2xx) are returned to the caller. Failed responses are
raised as `ApiError` subclasses and transport failures as `TransportError`,
unless the refresh interceptor recovers them by refreshing the credentials and
resubmitting the request once.
"""

from typing import Any, Dict, Optional, Sequence

import httpx
import structlog

from storefront.core.config.settings import Settings
from storefront.core.exceptions import (
    StorefrontError,
    TokenRefreshError,
    TransportError,
    api_error_from_response,
)
from storefront.domain.interfaces.storage import ITokenStore
from storefront.domain.services.refresh_coordinator import RefreshCoordinator
from storefront.domain.value_objects.credentials import CredentialPair
from storefront.domain.value_objects.pending_request import PendingRequest

from .interceptors import (
    DEFAULT_AUTH_ENDPOINTS,
    AuthRefreshInterceptor,
    BearerTokenInterceptor,
)

logger = structlog.get_logger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json"}


class ApiClient:
    """HTTP client with bearer authentication and transparent token refresh.

    Args:
        base_url: Storefront API root, e.g. ``http://localhost:5000/api``.
        token_store: Where the credential pair is read from and written to.
        timeout: Per-request timeout in seconds.
        refresh_path: Path of the refresh endpoint, relative to ``base_url``.
        auth_endpoints: Path fragments never eligible for refresh handling.
        transport: Optional httpx transport (used by tests to fake the API).
        headers: Extra default headers.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token_store: ITokenStore,
        timeout: float = 30.0,
        refresh_path: str = "/auth/refresh",
        auth_endpoints: Sequence[str] = DEFAULT_AUTH_ENDPOINTS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url
        self.refresh_path = refresh_path
        self.token_store = token_store
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={**DEFAULT_HEADERS, **(headers or {})},
            timeout=timeout,
            transport=transport,
        )
        self.coordinator = RefreshCoordinator()
        self.request_interceptor = BearerTokenInterceptor(token_store)
        self.response_interceptor = AuthRefreshInterceptor(
            token_store,
            self.refresh_credentials,
            auth_endpoints=auth_endpoints,
            coordinator=self.coordinator,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        token_store: ITokenStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ApiClient":
        return cls(
            settings.API_URL,
            token_store=token_store,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
            refresh_path=settings.REFRESH_PATH,
            auth_endpoints=settings.AUTH_ENDPOINTS,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, traceback) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Public request API
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Send a request through the interceptor pipeline.

        Returns:
            httpx.Response: A 2xx response, possibly from the replayed request.

        Raises:
            ApiError: Non-2xx response that could not be recovered.
            TransportError: No response was received.
        """
        pending = PendingRequest(
            method=method,
            url=url,
            headers=headers or {},
            params=params,
            json=json,
            content=content,
        )
        return await self._dispatch(pending)

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    # ------------------------------------------------------------------
    # Refresh endpoint
    # ------------------------------------------------------------------

    async def refresh_credentials(self, refresh_token: str) -> CredentialPair:
        """Exchange a refresh token for a new credential pair.

        The call bypasses the interceptor pipeline: it carries no bearer token
        and its failures are never refreshed.

        Raises:
            ApiError: The refresh endpoint answered with a non-2xx status.
            TransportError: The refresh endpoint could not be reached.
            TokenRefreshError: The response body is not a credential pair.
        """
        response = await self._send(
            PendingRequest(method="POST", url=self.refresh_path, json={"refreshToken": refresh_token})
        )
        try:
            return CredentialPair.from_auth_response(response.json())
        except ValueError as exc:
            raise TokenRefreshError(f"Invalid refresh response: {exc}") from exc

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def _dispatch(self, request: PendingRequest) -> httpx.Response:
        outgoing = await self.request_interceptor(request)
        try:
            return await self._send(outgoing)
        except StorefrontError as error:
            replay = await self.response_interceptor.on_error(error, outgoing)
            if replay is None:
                raise
        return await self._dispatch(replay)

    async def _send(self, request: PendingRequest) -> httpx.Response:
        http_request = self._http.build_request(
            request.method,
            request.url,
            params=request.params,
            json=request.json,
            content=request.content,
            headers=request.headers,
        )
        try:
            response = await self._http.send(http_request)
        except httpx.RequestError as exc:
            logger.warning(
                "request_transport_error",
                method=request.method,
                path=request.url,
                error_type=type(exc).__name__,
            )
            raise TransportError(
                f"{request.method} {request.url} failed: {exc!s}", request=http_request
            ) from exc

        if not response.is_success:
            raise api_error_from_response(response)
        return response
