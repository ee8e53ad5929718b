"""
Application-wide client settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines settings shared by every part of the client: project identity,
    environment, logging and the locale used when a caller does not pass one.
    """
    PROJECT_NAME: str = "storefront-client"
    VERSION: str = "0.1.0"
    APP_ENV: str = Field(default="development", pattern="^(development|test|staging|production)$")
    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    DEFAULT_LOCALE: str = "es"
