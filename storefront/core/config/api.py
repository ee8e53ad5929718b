"""
Storefront API connection settings.
"""
from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class ApiSettings(BaseSettings):
    """
    Defines how the client reaches the storefront backend.

    AUTH_ENDPOINTS lists the path fragments that never trigger a token
    refresh when they answer 401 (login, register and the refresh call itself).
    """
    API_URL: str = "http://localhost:5000/api"
    REQUEST_TIMEOUT_SECONDS: float = Field(gt=0, default=30.0)

    REFRESH_PATH: str = "/auth/refresh"
    AUTH_ENDPOINTS: Union[str, List[str]] = Field(
        default="/auth/login,/auth/register,/auth/refresh", validate_default=True
    )

    @field_validator("AUTH_ENDPOINTS", mode="before")
    @classmethod
    def assemble_auth_endpoints(cls, v: Union[str, List[str]]) -> List[str]:
        """
        Splits a comma-separated string of endpoint fragments into a list.

        Args:
            v: Input value as a string or list of path fragments.

        Returns:
            List of stripped, non-empty path fragments.
        """
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    @field_validator("API_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
