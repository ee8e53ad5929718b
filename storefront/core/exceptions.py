"""Structured exception hierarchy for the storefront client.

Every error raised by the client derives from `StorefrontError` and carries a
machine-readable `code` alongside a human-readable `message`. HTTP failures
keep the request and response that produced them so callers can inspect the
status, the target path and the decoded error body.
"""

from __future__ import annotations

from typing import Any, Final, Optional

import httpx

__all__: Final = [
    "StorefrontError",
    "ApiError",
    "UnauthorizedError",
    "NotFoundError",
    "TransportError",
    "TokenRefreshError",
    "ConfigurationError",
    "api_error_from_response",
]


class StorefrontError(Exception):
    """Base exception class for all custom errors in the storefront client.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# HTTP errors
# ---------------------------------------------------------------------------


class ApiError(StorefrontError):
    """Raised when the storefront API answers with a non-2xx status.

    Attributes:
        status_code (int): The HTTP status of the response.
        request (httpx.Request): The request that was sent.
        response (httpx.Response): The response that was received.
        payload: The decoded JSON error body, or ``None`` when the body is not JSON.
    """

    def __init__(
        self,
        message: str,
        *,
        request: httpx.Request,
        response: httpx.Response,
        payload: Any = None,
        code: str = "api_error",
    ):
        super().__init__(message, code)
        self.request = request
        self.response = response
        self.status_code = response.status_code
        self.payload = payload

    @property
    def path(self) -> str:
        return self.request.url.path


class UnauthorizedError(ApiError):
    """Raised on a `401 Unauthorized` response.

    For regular endpoints this usually means the access token expired; the
    client's refresh interceptor handles it before it reaches the caller.
    """

    def __init__(self, message: str, *, request, response, payload=None, code: str = "unauthorized"):
        super().__init__(message, request=request, response=response, payload=payload, code=code)


class NotFoundError(ApiError):
    """Raised on a `404 Not Found` response."""

    def __init__(self, message: str, *, request, response, payload=None, code: str = "not_found"):
        super().__init__(message, request=request, response=response, payload=payload, code=code)


def api_error_from_response(response: httpx.Response) -> ApiError:
    """Build the most specific `ApiError` for a failed response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    detail: Optional[str] = None
    if isinstance(payload, dict):
        detail = payload.get("message") or payload.get("title")
    request = response.request
    message = f"{request.method} {request.url.path} failed with status {response.status_code}"
    if detail:
        message = f"{message}: {detail}"

    if response.status_code == 401:
        error_cls = UnauthorizedError
    elif response.status_code == 404:
        error_cls = NotFoundError
    else:
        error_cls = ApiError
    return error_cls(message, request=request, response=response, payload=payload)


# ---------------------------------------------------------------------------
# Non-HTTP failures
# ---------------------------------------------------------------------------


class TransportError(StorefrontError):
    """Raised when no usable HTTP response was received (network failure, timeout,
    undecodable body, redirect loop).

    The underlying `httpx.RequestError` is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, request: Optional[httpx.Request] = None, code: str = "transport_error"):
        super().__init__(message, code)
        self.request = request


class TokenRefreshError(StorefrontError):
    """Raised when a token refresh cannot produce a usable credential pair.

    HTTP failures of the refresh endpoint surface as `ApiError`; this error
    covers malformed refresh responses and refreshes cancelled mid-flight.
    """

    def __init__(self, message: str, code: str = "token_refresh_error"):
        super().__init__(message, code)


class ConfigurationError(StorefrontError):
    """Raised when the client is built from an invalid configuration."""

    def __init__(self, message: str, code: str = "configuration_error"):
        super().__init__(message, code)
