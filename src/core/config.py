"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCHEMA_URI = "http://adaptivecards.io/schemas/adaptive-card.json"
DEFAULT_CARD_VERSION = "1.5"


class Settings(BaseSettings):
    """Centralized runtime configuration."""

    card_max_depth: int = Field(default=64, ge=1, validation_alias="CARD_MAX_DEPTH")
    card_schema_uri: str = Field(
        default=DEFAULT_SCHEMA_URI, validation_alias="CARD_SCHEMA_URI"
    )
    card_version: str = Field(
        default=DEFAULT_CARD_VERSION, validation_alias="CARD_VERSION"
    )
    card_value_separator: str = Field(
        default=",", min_length=1, validation_alias="CARD_VALUE_SEPARATOR"
    )
    card_presentation_tables: str | None = Field(
        default=None, validation_alias="CARD_PRESENTATION_TABLES"
    )
    card_hero_enabled: bool = Field(default=True, validation_alias="CARD_HERO_ENABLED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = ["DEFAULT_CARD_VERSION", "DEFAULT_SCHEMA_URI", "Settings", "get_settings"]
