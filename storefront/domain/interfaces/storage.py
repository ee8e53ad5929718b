"""Storage interfaces for credentials and client-side session data.

The client never talks to a concrete storage medium directly. Tokens and the
anonymous cart session live behind `IKeyValueStore`; `ITokenStore` layers the
credential-pair rules on top of it.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from storefront.domain.value_objects.credentials import CredentialPair


class IKeyValueStore(ABC):
    """Interface for a flat string key-value store."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        raise NotImplementedError

    @abstractmethod
    async def set_many(self, values: Mapping[str, str]) -> None:
        """Store several keys as one step; either all are written or none."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, *keys: str) -> None:
        """Remove the given keys as one step. Missing keys are ignored."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release any underlying connection."""
        return None


class ITokenStore(ABC):
    """Interface for persisting the access/refresh credential pair.

    Both tokens are written together and cleared together.
    """

    @abstractmethod
    async def get_access_token(self) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def get_refresh_token(self) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def get(self) -> Optional[CredentialPair]:
        """Return the stored pair, or ``None`` if either half is missing."""
        raise NotImplementedError

    @abstractmethod
    async def set(self, pair: CredentialPair) -> None:
        raise NotImplementedError

    @abstractmethod
    async def clear(self) -> None:
        raise NotImplementedError
