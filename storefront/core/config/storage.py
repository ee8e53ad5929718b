"""
Token and session storage settings.
"""
import logging

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class StorageSettings(BaseSettings):
    """
    Defines where credentials and the anonymous cart session are kept.

    Backends:
        - memory: process-local dictionary, lost on exit.
        - redis: shared store reachable at REDIS_URL.
        - null: no storage at all; reads return nothing and writes are dropped.
          This mirrors running outside a browser-like context.
    """
    TOKEN_STORE_BACKEND: str = Field(default="memory", pattern="^(memory|redis|null)$")
    REDIS_URL: str = ""

    ACCESS_TOKEN_KEY: str = "auth-token"
    REFRESH_TOKEN_KEY: str = "auth-refresh-token"
    CART_SESSION_KEY: str = "cart-session-id"

    @model_validator(mode="after")
    def _require_redis_url(self) -> "StorageSettings":
        """Ensures a Redis URL is configured when the redis backend is selected.

        Raises:
            ValueError: If TOKEN_STORE_BACKEND is redis and REDIS_URL is empty.
        """
        if self.TOKEN_STORE_BACKEND == "redis" and not self.REDIS_URL:
            error_msg = "REDIS_URL must be set when TOKEN_STORE_BACKEND is 'redis'."
            logger.error(error_msg)
            raise ValueError(error_msg)
        return self
