"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest


# Ensure the package is importable when running tests without an editable
# install. ``reelsync`` sits at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reelsync.config import Settings  # noqa: E402
from reelsync.models import (  # noqa: E402
    CatalogRecord,
    FieldPatch,
    MetadataCandidate,
    MetadataEntry,
    ResultType,
)


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


def build_settings(**overrides: Any) -> Settings:
    """Return a settings object with defaults suitable for tests."""

    base: dict[str, Any] = {
        "_env_file": None,
        "AIRTABLE_API_KEY": "pat-test",
        "AIRTABLE_BASE_ID": "appBase",
        "AIRTABLE_TABLE_ID": "tblMovies",
        "OMDB_API_KEY": "omdb-key",
    }
    base.update(overrides)
    return Settings(**base)


@pytest.fixture
def settings() -> Settings:
    return build_settings()


class FakeProvider:
    """In-memory metadata provider recording every call it receives."""

    def __init__(
        self,
        search_results: dict[str, list[MetadataCandidate]] | None = None,
        entries: dict[str, MetadataEntry] | None = None,
    ):
        self.search_results = search_results or {}
        self.entries = entries or {}
        self.search_calls: list[tuple[str, ResultType | None, str | None]] = []
        self.lookup_calls: list[str] = []

    async def search(
        self,
        title: str,
        result_type: ResultType | None = None,
        year: str | None = None,
    ) -> list[MetadataCandidate]:
        self.search_calls.append((title, result_type, year))
        return list(self.search_results.get(title, []))

    async def get_by_id(self, imdb_id: str) -> MetadataEntry:
        self.lookup_calls.append(imdb_id)
        return self.entries.get(imdb_id) or MetadataEntry(
            found=False, error="Incorrect IMDb ID."
        )

    @property
    def call_count(self) -> int:
        return len(self.search_calls) + len(self.lookup_calls)


class FakeStore:
    """In-memory catalog store that applies patches to its own rows."""

    def __init__(self, records: list[CatalogRecord]):
        self.records = {record.record_id: record for record in records}
        self.order = [record.record_id for record in records]
        self.patches: list[tuple[str, FieldPatch, bool]] = []

    async def list_all(self) -> list[CatalogRecord]:
        return [self.records[record_id] for record_id in self.order]

    async def apply_patch(
        self, record_id: str, patch: FieldPatch, *, typecast: bool = True
    ) -> dict[str, Any]:
        self.patches.append((record_id, patch, typecast))
        record = self.records[record_id]
        update: dict[str, Any] = {}
        if patch.imdb_id is not None:
            update["imdb_id"] = patch.imdb_id
        if patch.cover_url is not None:
            update["cover"] = [{"url": patch.cover_url}]
        if patch.runtime_minutes is not None:
            update["runtime_minutes"] = patch.runtime_minutes
        if patch.release_year is not None:
            update["release_year"] = patch.release_year
        self.records[record_id] = CatalogRecord.model_validate(
            {**record.model_dump(), **update}
        )
        return {"id": record_id, "fields": patch.to_fields()}


def make_entry(imdb_id: str, **fields: Any) -> MetadataEntry:
    """Build a found provider entry with sensible defaults."""

    data: dict[str, Any] = {
        "imdb_id": imdb_id,
        "title": "Example",
        "year": "2020",
        "type": ResultType.MOVIE,
        "poster": f"https://img.example.com/{imdb_id}.jpg",
        "runtime": "90 min",
        "found": True,
    }
    data.update(fields)
    return MetadataEntry.model_validate(data)


def make_candidate(imdb_id: str, title: str = "Example") -> MetadataCandidate:
    return MetadataCandidate(imdb_id=imdb_id, title=title, type=ResultType.MOVIE)
