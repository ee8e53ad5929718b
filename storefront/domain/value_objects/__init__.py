"""Domain value objects for the storefront client."""

from .credentials import CredentialPair
from .pending_request import AUTHORIZATION_HEADER, PendingRequest, bearer

__all__ = ["CredentialPair", "PendingRequest", "AUTHORIZATION_HEADER", "bearer"]
