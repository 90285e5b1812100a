"""
12-Factor config: no hardcoded endpoints, fail fast on missing critical env.
SecretStr ensures secrets are never logged in plain text.
"""
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # App (non-sensitive, safe defaults)
    APP_NAME: str = "catalog-search"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="Debug mode")

    # Dataset: may instead be given per run (rebuild-search --data-dir)
    DATA_DIR: str | None = Field(
        default=None,
        description="Dataset root holding one JSON file per entity under villagers/ and items/",
    )

    # Elasticsearch: URL required, key optional (local clusters run without auth)
    ELASTICSEARCH_URL: str = Field(..., description="Elasticsearch URL (e.g. http://localhost:9200)")
    ELASTICSEARCH_API_KEY: SecretStr | None = Field(default=None, description="Elasticsearch API key")
    ELASTICSEARCH_REQUEST_TIMEOUT: float = Field(default=30.0, description="Per-request timeout in seconds")
    SEARCH_INDEX_PREFIX: str = Field(
        default="search",
        description="Prefix of generated physical index names",
    )

    # Redis: enrichment data and the live index pointer
    REDIS_URL: str = Field(..., description="Redis URL (e.g. redis://localhost:6379/0)")
    SEARCH_INDEX_POINTER_KEY: str = Field(
        default="searchIndex",
        description="Key whose value is the name of the live physical index",
    )
    ENRICHMENT_KEY_PREFIX: str = Field(
        default="",
        description="Prefix prepended to entity ids when reading enrichment data",
    )


@lru_cache()
def get_settings() -> Settings:
    """Cached settings; fails at first access if required env vars are missing."""
    return Settings()
