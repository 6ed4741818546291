"""Application settings and configuration management."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Disease Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # Cache Configuration
    cache_max_size: int = Field(default=100, ge=1)

    # Search Configuration
    max_query_length: int = Field(default=200, ge=1)
    default_suggestion_limit: int = Field(default=5, ge=1)
    min_suggestion_length: int = Field(default=2, ge=1)
    highlight_tag: str = Field(default="mark", min_length=1)

    # Engine defaults
    enable_fuzzy_search: bool = Field(default=True)
    max_fuzzy_distance: int = Field(default=2, ge=0)
    enable_stemming: bool = Field(default=True)
    enable_synonyms: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="DISEASE_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
