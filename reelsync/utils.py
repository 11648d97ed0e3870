"""Title and runtime helpers shared by the enrichment services."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from .models import ContentFormat, ResultType


SEASON_SUFFIX_RE = re.compile(r": (?:season)*(?:series)*(?:volume)* \d*.*", re.IGNORECASE)
YEAR_TOKEN_RE = re.compile(r"\((\d{4})\)")
NON_ALPHANUMERIC_RE = re.compile(r"[^a-zA-Z0-9]")
REPEATED_SPACE_RE = re.compile(r"\s{2,}")


@dataclass(slots=True, frozen=True)
class SearchQuery:
    """Search key derived from a raw catalog title."""

    title: str
    result_type: ResultType | None = None
    year: str | None = None


def result_type_for(content_format: ContentFormat | None) -> ResultType | None:
    """Return the provider type that a catalog format should bias searches towards."""

    if content_format is ContentFormat.TELEVISION_SHOW:
        return ResultType.SERIES
    if content_format is ContentFormat.FEATURE_FILM:
        return ResultType.MOVIE
    if content_format in (
        ContentFormat.DOCUMENTARY,
        ContentFormat.TELEVISION_SPECIAL,
        ContentFormat.SHORT_FILM,
        ContentFormat.ANTHOLOGY_FILM,
        None,
    ):
        return None
    raise ValueError(f"Unhandled content format: {content_format!r}")


def normalize_title(title: str, content_format: ContentFormat | None) -> SearchQuery:
    """Turn a human-entered title into a provider search query.

    A parenthesised four digit year anywhere in the title becomes the year
    hint. Television shows lose any ``: Season 2`` style suffix. The rest is
    trimmed and lowercased.
    """

    working_title = title or ""
    year: str | None = None

    match = YEAR_TOKEN_RE.search(working_title)
    if match:
        year = match.group(1)
        working_title = YEAR_TOKEN_RE.sub("", working_title, count=1)

    if content_format is ContentFormat.TELEVISION_SHOW:
        working_title = SEASON_SUFFIX_RE.sub("", working_title)

    return SearchQuery(
        title=working_title.strip().lower(),
        result_type=result_type_for(content_format),
        year=year,
    )


def sanitize_title(title: str) -> str:
    """Replace punctuation with spaces and collapse runs of whitespace."""

    cleaned = NON_ALPHANUMERIC_RE.sub(" ", title)
    return REPEATED_SPACE_RE.sub(" ", cleaned)


def parse_runtime_minutes(runtime: str | None) -> int | None:
    """Return the leading number of a ``"90 min"`` style runtime, if valid."""

    if not runtime:
        return None
    parts = runtime.split()
    if not parts:
        return None
    try:
        value = float(parts[0])
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    minutes = round(value)
    return minutes if minutes > 0 else None
