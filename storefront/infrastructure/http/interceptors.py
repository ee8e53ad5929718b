"""Request and response interceptors of the storefront HTTP client.

`BearerTokenInterceptor` runs before every outbound request and attaches the
stored access token. `AuthRefreshInterceptor` runs on every failed request and
decides whether the failure can be recovered by refreshing the credentials.
"""

from typing import Awaitable, Callable, Iterable, Optional, Sequence

import structlog

from storefront.core.exceptions import StorefrontError, UnauthorizedError
from storefront.domain.interfaces.storage import ITokenStore
from storefront.domain.services.refresh_coordinator import RefreshCoordinator
from storefront.domain.value_objects.credentials import CredentialPair
from storefront.domain.value_objects.pending_request import PendingRequest

logger = structlog.get_logger(__name__)

DEFAULT_AUTH_ENDPOINTS = ("/auth/login", "/auth/register", "/auth/refresh")

RefreshCall = Callable[[str], Awaitable[CredentialPair]]


def is_auth_endpoint(path: Optional[str], auth_endpoints: Iterable[str] = DEFAULT_AUTH_ENDPOINTS) -> bool:
    """Return True when ``path`` targets one of the auth endpoints (substring match)."""
    if not isinstance(path, str):
        return False
    return any(endpoint in path for endpoint in auth_endpoints)


class BearerTokenInterceptor:
    """Sets ``Authorization: Bearer <token>`` from the token store.

    Requests issued while no access token is stored are left untouched.
    """

    def __init__(self, token_store: ITokenStore):
        self._token_store = token_store

    async def __call__(self, request: PendingRequest) -> PendingRequest:
        token = await self._token_store.get_access_token()
        if token:
            return request.with_bearer(token)
        return request


class AuthRefreshInterceptor:
    """Recovers requests that failed because the access token expired.

    Decision order for a failed request:

    1. Anything other than a 401 is not handled.
    2. A 401 from an auth endpoint (login, register, refresh) is not handled,
       so a failing refresh can never trigger another refresh.
    3. A request already retried once is not handled.
    4. Otherwise the request is marked retried and joins the refresh cycle:
       it either runs the refresh itself or waits for the one in flight.

    The refresh reads the stored refresh token. Without one, the stored
    credentials are cleared and the original 401 is raised. Otherwise the
    refresh endpoint is called; on success the new pair is stored, on failure
    the credentials are cleared and the refresh error is raised to every
    request of that cycle.
    """

    def __init__(
        self,
        token_store: ITokenStore,
        refresh_call: RefreshCall,
        auth_endpoints: Sequence[str] = DEFAULT_AUTH_ENDPOINTS,
        coordinator: Optional[RefreshCoordinator] = None,
    ):
        self._token_store = token_store
        self._refresh_call = refresh_call
        self.auth_endpoints = tuple(auth_endpoints)
        self.coordinator = coordinator or RefreshCoordinator()

    def should_refresh(self, error: StorefrontError, request: PendingRequest) -> bool:
        if not isinstance(error, UnauthorizedError):
            return False
        if is_auth_endpoint(error.path, self.auth_endpoints):
            return False
        if request.retried:
            return False
        return True

    async def on_error(self, error: StorefrontError, request: PendingRequest) -> Optional[PendingRequest]:
        """Return the request to resubmit, or ``None`` when the error must propagate.

        Raises:
            UnauthorizedError: The original 401, when no refresh token is stored.
            StorefrontError: The refresh error, when the refresh call failed.
        """
        if not self.should_refresh(error, request):
            return None

        request.mark_retried()
        token = await self.coordinator.run_exclusive(lambda: self._refresh(error))
        logger.debug("request_replayed_after_refresh", method=request.method, path=request.url)
        return request.with_bearer(token)

    async def _refresh(self, original_error: UnauthorizedError) -> str:
        refresh_token = await self._token_store.get_refresh_token()
        if not refresh_token:
            logger.warning("token_refresh_skipped", reason="no_refresh_token", path=original_error.path)
            await self._token_store.clear()
            raise original_error

        logger.info("token_refresh_started", path=original_error.path)
        try:
            pair = await self._refresh_call(refresh_token)
        except StorefrontError as exc:
            logger.warning("token_refresh_failed", error_code=exc.code, error_message=exc.message)
            await self._token_store.clear()
            raise

        await self._token_store.set(pair)
        logger.info("token_refresh_succeeded", **pair.mask_for_logging())
        return pair.access_token
