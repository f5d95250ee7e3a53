"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values should be stored in .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database settings (property store collaborator)
    database_url: str = "sqlite:///./cma.db"
    database_pool_size: int = 10
    database_max_overflow: int = 5
    database_pool_timeout: int = 30
    database_pool_recycle: int = 3600
    database_echo: bool = False  # Set to True for SQL query logging

    # Search settings
    search_default_limit: int = 500
    convenience_search_default_limit: int = 100

    # Seller update settings
    seller_update_result_limit: int = 100
    seller_update_send_hour: int = 9

    # Rental detection (closed/list prices below this are monthly rents)
    rental_price_ceiling: float = 10000.0

    # Statistics cache settings
    redis_url: Optional[str] = None
    statistics_cache_enabled: bool = False
    statistics_cache_ttl_seconds: int = 300
    statistics_cache_prefix: str = "cma:stats"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"
    debug: bool = False


# Singleton instance
settings = Settings()
