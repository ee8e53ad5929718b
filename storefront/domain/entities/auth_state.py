"""Client-side authentication state.

Mirrors what the storefront UI keeps about the signed-in customer: the user
profile, the current credential pair and the loading flag. It is updated by
the auth client on login, registration, profile fetches and logout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from storefront.domain.value_objects.credentials import CredentialPair

if TYPE_CHECKING:
    from storefront.adapters.api.schemas.auth import AuthResponseDto, UserDto


@dataclass
class AuthState:
    """Snapshot of the current customer session.

    Attributes:
        user: Profile of the signed-in customer, if any.
        credentials: The credential pair returned by the last login/refresh.
        is_loading: Whether an auth operation is running.
        is_authenticated: Whether a customer is signed in.
    """

    user: Optional["UserDto"] = None
    credentials: Optional[CredentialPair] = None
    is_loading: bool = False
    is_authenticated: bool = False

    @property
    def token(self) -> Optional[str]:
        return self.credentials.access_token if self.credentials else None

    @property
    def refresh_token(self) -> Optional[str]:
        return self.credentials.refresh_token if self.credentials else None

    def set_auth(self, response: "AuthResponseDto") -> None:
        self.user = response.user
        self.credentials = response.credentials()
        self.is_authenticated = True
        self.is_loading = False

    def set_user(self, user: "UserDto") -> None:
        self.user = user

    def set_loading(self, is_loading: bool) -> None:
        self.is_loading = is_loading

    def logout(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.user = None
        self.credentials = None
        self.is_loading = False
        self.is_authenticated = False
