"""Credential pair persistence on top of a key-value store."""

from typing import Optional

import structlog

from storefront.domain.interfaces.storage import IKeyValueStore, ITokenStore
from storefront.domain.value_objects.credentials import CredentialPair

logger = structlog.get_logger(__name__)

DEFAULT_ACCESS_TOKEN_KEY = "auth-token"
DEFAULT_REFRESH_TOKEN_KEY = "auth-refresh-token"


class TokenStore(ITokenStore):
    """Keeps the access and refresh tokens under two fixed keys.

    Writes and clears always touch both keys in a single store operation.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        access_key: str = DEFAULT_ACCESS_TOKEN_KEY,
        refresh_key: str = DEFAULT_REFRESH_TOKEN_KEY,
    ):
        self._store = store
        self.access_key = access_key
        self.refresh_key = refresh_key

    async def get_access_token(self) -> Optional[str]:
        return await self._store.get(self.access_key)

    async def get_refresh_token(self) -> Optional[str]:
        return await self._store.get(self.refresh_key)

    async def get(self) -> Optional[CredentialPair]:
        access_token = await self.get_access_token()
        refresh_token = await self.get_refresh_token()
        if not access_token or not refresh_token:
            return None
        return CredentialPair(access_token=access_token, refresh_token=refresh_token)

    async def set(self, pair: CredentialPair) -> None:
        await self._store.set_many(
            {self.access_key: pair.access_token, self.refresh_key: pair.refresh_token}
        )
        logger.debug("credentials_stored", **pair.mask_for_logging())

    async def clear(self) -> None:
        await self._store.delete(self.access_key, self.refresh_key)
        logger.debug("credentials_cleared")
