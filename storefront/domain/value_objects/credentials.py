"""Credential pair value object.

The access token and the refresh token always travel together: they are
created together by login or refresh, stored together and cleared together.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from storefront.core.logging import mask_token


@dataclass(frozen=True)
class CredentialPair:
    """Value object holding an access token and its matching refresh token.

    Both tokens must be non-empty; a dangling access token without a refresh
    token cannot be represented.
    """

    access_token: str
    refresh_token: str

    def __post_init__(self):
        if not self.access_token:
            raise ValueError("Access token cannot be empty")
        if not self.refresh_token:
            raise ValueError("Refresh token cannot be empty")

    @classmethod
    def from_auth_response(cls, body: Mapping[str, Any]) -> "CredentialPair":
        """Build a pair from the API's ``{token, refreshToken}`` body.

        Raises:
            ValueError: If either field is missing, empty or not a string.
        """
        if not isinstance(body, Mapping):
            raise ValueError("Auth response body must be a JSON object")
        token = body.get("token")
        refresh_token = body.get("refreshToken")
        if not isinstance(token, str) or not isinstance(refresh_token, str):
            raise ValueError("Auth response must contain string 'token' and 'refreshToken'")
        return cls(access_token=token, refresh_token=refresh_token)

    def mask_for_logging(self) -> dict:
        """Return masked tokens for safe logging."""
        return {
            "access_token": mask_token(self.access_token),
            "refresh_token": mask_token(self.refresh_token),
        }

    def __repr__(self) -> str:
        masked = self.mask_for_logging()
        return f"CredentialPair(access_token={masked['access_token']!r}, refresh_token={masked['refresh_token']!r})"
