"""Pydantic models describing catalog rows and provider payloads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

OMDB_MISSING = "N/A"


class CatalogField(str, Enum):
    """Column names of the catalog table; these round-trip unchanged."""

    IMDB_ID = "imdb id"
    ROW_ID = "id"
    RUNTIME = "runtime (minutes)"
    RELEASE_YEAR = "release year"
    COVER = "cover"
    FORMAT = "format"
    TITLE = "title"
    FIRST_REVIEW = "kev review"
    SECOND_REVIEW = "net review"


class ContentFormat(str, Enum):
    """Values of the catalog's ``format`` column."""

    FEATURE_FILM = "feature film"
    TELEVISION_SHOW = "television show"
    DOCUMENTARY = "documentary"
    TELEVISION_SPECIAL = "television special"
    SHORT_FILM = "short film"
    ANTHOLOGY_FILM = "anthology film"


class ResultType(str, Enum):
    """Result types understood by the metadata provider."""

    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _provider_missing_to_none(value: Any) -> Any:
    if isinstance(value, str) and (not value.strip() or value.strip() == OMDB_MISSING):
        return None
    return value


class Attachment(BaseModel):
    """An attachment cell entry; only its presence matters here."""

    id: str | None = None
    url: str | None = None
    filename: str | None = None


class CatalogRecord(BaseModel):
    """A single row of the catalog table."""

    model_config = ConfigDict(populate_by_name=True)

    record_id: str
    row_id: str | int | None = Field(default=None, alias=CatalogField.ROW_ID.value)
    imdb_id: str | None = Field(default=None, alias=CatalogField.IMDB_ID.value)
    title: str = Field(default="", alias=CatalogField.TITLE.value)
    format: ContentFormat | None = Field(default=None, alias=CatalogField.FORMAT.value)
    cover: list[Attachment] = Field(default_factory=list, alias=CatalogField.COVER.value)
    runtime_minutes: int | None = Field(default=None, alias=CatalogField.RUNTIME.value)
    release_year: str | None = Field(
        default=None, alias=CatalogField.RELEASE_YEAR.value
    )
    first_review: str | None = Field(
        default=None, alias=CatalogField.FIRST_REVIEW.value
    )
    second_review: str | None = Field(
        default=None, alias=CatalogField.SECOND_REVIEW.value
    )

    @field_validator("imdb_id", "first_review", "second_review", "format", mode="before")
    @classmethod
    def _drop_blank_strings(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("release_year", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value))
        return _blank_to_none(value)

    @field_validator("cover", mode="before")
    @classmethod
    def _cover_list(cls, value: Any) -> Any:
        return value or []

    @classmethod
    def from_airtable(cls, payload: dict[str, Any]) -> "CatalogRecord":
        """Build a record from an API row (``{"id": ..., "fields": {...}}``)."""

        fields = payload.get("fields") or {}
        return cls.model_validate({**fields, "record_id": payload["id"]})

    @property
    def has_cover(self) -> bool:
        return len(self.cover) > 0

    def label(self) -> str:
        """Return a short identifier for log lines."""

        row = self.row_id if self.row_id is not None else self.title
        return f"{row} (internal ID {self.record_id})"


class MetadataCandidate(BaseModel):
    """A lightweight search result from the provider."""

    model_config = ConfigDict(populate_by_name=True)

    imdb_id: str = Field(default="", alias="imdbID")
    title: str = Field(default="", alias="Title")
    year: str | None = Field(default=None, alias="Year")
    type: ResultType | None = Field(default=None, alias="Type")
    poster: str | None = Field(default=None, alias="Poster")

    @field_validator("year", "poster", mode="before")
    @classmethod
    def _drop_placeholders(cls, value: Any) -> Any:
        return _provider_missing_to_none(value)

    @field_validator("type", mode="before")
    @classmethod
    def _known_types_only(cls, value: Any) -> Any:
        try:
            return ResultType(value)
        except ValueError:
            return None


class MetadataEntry(MetadataCandidate):
    """A full provider lookup, including whether the provider found anything."""

    runtime: str | None = Field(default=None, alias="Runtime")
    found: bool = Field(
        default=False, validation_alias=AliasChoices("Response", "found")
    )
    error: str | None = Field(default=None, alias="Error")

    @field_validator("runtime", mode="before")
    @classmethod
    def _drop_runtime_placeholder(cls, value: Any) -> Any:
        return _provider_missing_to_none(value)

    @field_validator("found", mode="before")
    @classmethod
    def _parse_response_flag(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value


@dataclass(slots=True)
class FieldPatch:
    """The minimal set of field changes proposed for one catalog record."""

    imdb_id: str | None = None
    cover_url: str | None = None
    runtime_minutes: int | None = None
    release_year: str | None = None

    def is_empty(self) -> bool:
        return not self.to_fields()

    def to_fields(self) -> dict[str, Any]:
        """Return the patch keyed by catalog column name."""

        fields: dict[str, Any] = {}
        if self.imdb_id is not None:
            fields[CatalogField.IMDB_ID.value] = self.imdb_id
        if self.cover_url is not None:
            # A bare URL uploads a brand-new attachment.
            fields[CatalogField.COVER.value] = [{"url": self.cover_url}]
        if self.runtime_minutes is not None:
            fields[CatalogField.RUNTIME.value] = self.runtime_minutes
        if self.release_year is not None:
            fields[CatalogField.RELEASE_YEAR.value] = self.release_year
        return fields
