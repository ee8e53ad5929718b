"""Domain interfaces for the storefront client."""

from .storage import IKeyValueStore, ITokenStore

__all__ = ["IKeyValueStore", "ITokenStore"]
