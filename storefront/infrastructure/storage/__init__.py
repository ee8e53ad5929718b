"""Storage backends for credentials and client-side session data."""

from .key_value import (
    MemoryKeyValueStore,
    NullKeyValueStore,
    RedisKeyValueStore,
    create_key_value_store,
)
from .token_store import TokenStore

__all__ = [
    "MemoryKeyValueStore",
    "NullKeyValueStore",
    "RedisKeyValueStore",
    "TokenStore",
    "create_key_value_store",
]
