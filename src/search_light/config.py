"""Centralized configuration for search-light using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Default builder options loaded from ``SEARCH_LIGHT_*`` environment variables.

    Every value here only seeds a new builder; the fluent methods
    (``compare_case()``, ``sorted()``, ``with_stats()``...) override it per instance.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_LIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Matching
    base_threshold: int = Field(
        default=0,
        ge=0,
        description="Added to the filter count (plus one when search terms exist) to get the full-match threshold",
    )
    case_sensitive: bool = Field(default=False, description="Compare search terms without lower-casing")

    # Sorting
    sort_by_relevance: bool = Field(default=False, description="Order matches by relevance, highest first")

    # Stats injection
    inject_stats: bool = Field(default=False, description="Attach relevance and missing terms to returned items")
    stats_property: str = Field(
        default="searchResults", min_length=1, description="Property name used for injected stats on mappings"
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
