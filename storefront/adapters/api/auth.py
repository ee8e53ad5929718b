"""Authentication client for the ``/auth`` endpoints.

Login and registration store the returned credential pair so the HTTP
client's interceptors pick it up on the next request. Logout is best effort:
the local credentials are always cleared, even when the server call fails.
"""

from typing import Optional

import structlog

from storefront.core.exceptions import StorefrontError
from storefront.domain.entities.auth_state import AuthState
from storefront.domain.interfaces.storage import ITokenStore
from storefront.infrastructure.http.client import ApiClient

from .schemas.auth import (
    AuthResponseDto,
    ForgotPasswordDto,
    LoginDto,
    RefreshTokenDto,
    RegisterDto,
    ResetPasswordDto,
    UserDto,
)

logger = structlog.get_logger(__name__)


class AuthApi:
    """Customer authentication operations."""

    def __init__(self, client: ApiClient, token_store: ITokenStore, state: Optional[AuthState] = None):
        self._client = client
        self._token_store = token_store
        self.state = state or AuthState()

    async def login(self, dto: LoginDto) -> AuthResponseDto:
        return await self._authenticate("/auth/login", dto.to_payload())

    async def register(self, dto: RegisterDto) -> AuthResponseDto:
        return await self._authenticate("/auth/register", dto.to_payload())

    async def forgot_password(self, dto: ForgotPasswordDto) -> None:
        await self._client.post("/auth/forgot-password", json=dto.to_payload())

    async def reset_password(self, dto: ResetPasswordDto) -> None:
        await self._client.post("/auth/reset-password", json=dto.to_payload())

    async def get_me(self) -> UserDto:
        response = await self._client.get("/auth/me")
        user = UserDto.model_validate(response.json())
        self.state.set_user(user)
        return user

    async def refresh_token(self, refresh_token: str) -> AuthResponseDto:
        """Explicitly exchange ``refresh_token`` for a new pair and store it."""
        response = await self._client.post(
            "/auth/refresh", json=RefreshTokenDto(refresh_token=refresh_token).to_payload()
        )
        data = AuthResponseDto.model_validate(response.json())
        await self._token_store.set(data.credentials())
        return data

    async def logout(self) -> None:
        """Sign out on the server and always clear local credentials.

        A failing server call is logged and not raised: the customer is signed
        out locally either way.
        """
        try:
            await self._client.post("/auth/logout")
        except StorefrontError as exc:
            logger.warning("logout_server_call_failed", error_code=exc.code, error_message=exc.message)
        finally:
            await self._token_store.clear()
            self.state.logout()
            logger.info("logout_completed")

    async def _authenticate(self, path: str, payload: dict) -> AuthResponseDto:
        self.state.set_loading(True)
        try:
            response = await self._client.post(path, json=payload)
        finally:
            self.state.set_loading(False)
        data = AuthResponseDto.model_validate(response.json())
        await self._token_store.set(data.credentials())
        self.state.set_auth(data)
        logger.info("customer_authenticated", path=path, user_id=data.user.id if data.user else None)
        return data
