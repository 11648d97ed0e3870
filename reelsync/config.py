"""Application configuration models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_COVER_APPROVAL_RATING = "🥰"


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    airtable_api_key: str = Field(alias="AIRTABLE_API_KEY")
    airtable_base_id: str = Field(alias="AIRTABLE_BASE_ID")
    airtable_table_id: str = Field(alias="AIRTABLE_TABLE_ID")
    omdb_api_key: str = Field(alias="OMDB_API_KEY")

    airtable_api_url: HttpUrl = Field(
        default="https://api.airtable.com/v0", alias="AIRTABLE_API_URL"
    )
    omdb_api_url: HttpUrl = Field(
        default="https://www.omdbapi.com/", alias="OMDB_API_URL"
    )

    cover_approval_rating: str = Field(
        default=DEFAULT_COVER_APPROVAL_RATING, alias="COVER_APPROVAL_RATING"
    )
    request_timeout_seconds: float = Field(
        default=20.0, alias="REQUEST_TIMEOUT", gt=0, le=300
    )
    dry_run: bool = Field(default=False, alias="DRY_RUN")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    @field_validator(
        "airtable_api_key",
        "airtable_base_id",
        "airtable_table_id",
        "omdb_api_key",
        "cover_approval_rating",
    )
    @classmethod
    def _require_non_blank(cls, value: str) -> str:
        """Reject credentials and identifiers that are only whitespace."""

        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Environment not configured correctly")
        return cleaned

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


def get_settings(**overrides: object) -> Settings:
    """Build the settings once at startup; callers pass the result around."""

    return Settings(**overrides)  # type: ignore[arg-type]
