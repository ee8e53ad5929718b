"""
Key-value store backends.

Three interchangeable backends implement `IKeyValueStore`:

- `MemoryKeyValueStore`: a process-local dictionary.
- `NullKeyValueStore`: the storage-less context; every read misses and every
  write is dropped.
- `RedisKeyValueStore`: an asynchronous Redis client. Multi-key writes and
  deletes run in a MULTI/EXEC transaction so related keys change together.

**Security Note**: tokens are stored as plain strings. Use a Redis URL with
TLS (``rediss://``) and a password when the server is not on a trusted network.
"""

from typing import Dict, Mapping, Optional

import structlog
from redis.asyncio import Redis

from storefront.core.config.settings import Settings
from storefront.core.exceptions import ConfigurationError
from storefront.domain.interfaces.storage import IKeyValueStore

logger = structlog.get_logger(__name__)


class MemoryKeyValueStore(IKeyValueStore):
    """Dictionary-backed store, shared by every flow of one client."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def set_many(self, values: Mapping[str, str]) -> None:
        self._data.update(values)

    async def delete(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)


class NullKeyValueStore(IKeyValueStore):
    """Store for contexts without persistent storage. Reads return ``None``."""

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str) -> None:
        return None

    async def set_many(self, values: Mapping[str, str]) -> None:
        return None

    async def delete(self, *keys: str) -> None:
        return None


class RedisKeyValueStore(IKeyValueStore):
    """Redis-backed store.

    Args:
        redis: An asynchronous client created with ``decode_responses=True``.
        owns_connection: Close the client in ``aclose``.
    """

    def __init__(self, redis: Redis, owns_connection: bool = False):
        self._redis = redis
        self._owns_connection = owns_connection

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        redis = Redis.from_url(url, encoding="utf-8", decode_responses=True)
        logger.debug("redis_connection_created")
        return cls(redis, owns_connection=True)

    async def get(self, key: str) -> Optional[str]:
        return await self._redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def set_many(self, values: Mapping[str, str]) -> None:
        async with self._redis.pipeline(transaction=True) as pipe:
            for key, value in values.items():
                pipe.set(key, value)
            await pipe.execute()

    async def delete(self, *keys: str) -> None:
        if not keys:
            return
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(*keys)
            await pipe.execute()

    async def aclose(self) -> None:
        if self._owns_connection:
            await self._redis.aclose()
            logger.debug("redis_connection_closed")


def create_key_value_store(settings: Settings) -> IKeyValueStore:
    """Build the backend selected by ``TOKEN_STORE_BACKEND``.

    Raises:
        ConfigurationError: If the backend name is unknown or Redis has no URL.
    """
    backend = settings.TOKEN_STORE_BACKEND
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "null":
        return NullKeyValueStore()
    if backend == "redis":
        if not settings.REDIS_URL:
            raise ConfigurationError("REDIS_URL must be set for the redis token store")
        return RedisKeyValueStore.from_url(settings.REDIS_URL)
    raise ConfigurationError(f"Unknown token store backend: {backend}")
