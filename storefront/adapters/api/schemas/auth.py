"""Payload models for the ``/auth`` endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from storefront.domain.value_objects.credentials import CredentialPair

from .base import ApiModel


class LoginDto(ApiModel):
    """Payload expected by ``POST /auth/login``."""

    email: EmailStr
    password: str
    remember_me: Optional[bool] = None


class RegisterDto(ApiModel):
    """Payload expected by ``POST /auth/register``."""

    email: EmailStr
    password: str
    confirm_password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    language: Optional[str] = None


class ForgotPasswordDto(ApiModel):
    email: EmailStr


class ResetPasswordDto(ApiModel):
    email: EmailStr
    token: str
    new_password: str
    confirm_password: str


class RefreshTokenDto(ApiModel):
    refresh_token: str


class UserDto(ApiModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    language: str = "es"
    email_verified: bool = False
    roles: List[str] = Field(default_factory=list)


class AuthResponseDto(ApiModel):
    """Body returned by login, register and refresh."""

    token: str
    refresh_token: str
    expires_at: Optional[datetime] = None
    user: Optional[UserDto] = None

    def credentials(self) -> CredentialPair:
        return CredentialPair(access_token=self.token, refresh_token=self.refresh_token)
