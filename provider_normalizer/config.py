"""
Configuration Management Module

Configures normalizer parameters via environment variables or .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Normalizer Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "provider-normalizer"
    DEBUG: bool = False

    # Request Shaping Config
    # max_tokens sent when the caller does not provide one (the Messages API requires it)
    DEFAULT_MAX_TOKENS: int = 1024
    # Tool choice type used when the request carries no tool choice
    DEFAULT_TOOL_CHOICE: str = "auto"

    # Stream Config
    # Log every consumed stream event at DEBUG level
    LOG_STREAM_EVENTS: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get normalizer configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Normalizer configuration instance
    """
    return Settings()
