"""Application settings.

Values come from environment variables prefixed with ``SHOPSEARCH_`` or
from a ``.env`` file in the working directory.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """ShopSearch service settings."""

    app_name: str = "ShopSearch API"
    catalog_path: str = "data/sample_products.csv"
    log_level: str = "INFO"

    # (default, maximum) result counts per operation
    search_default_limit: int = 20
    search_max_limit: int = 100
    similar_default_limit: int = 5
    similar_max_limit: int = 20
    popular_default_limit: int = 10
    popular_max_limit: int = 50

    model_config = SettingsConfigDict(
        env_prefix="SHOPSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance, cheap to use as a FastAPI dependency."""
    return Settings()
