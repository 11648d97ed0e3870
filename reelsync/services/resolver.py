"""Find the single best provider entry for a catalog record."""

from __future__ import annotations

import logging
from typing import Protocol

from ..models import MetadataCandidate, MetadataEntry, ResultType
from ..utils import SearchQuery, sanitize_title

logger = logging.getLogger(__name__)


class MetadataProvider(Protocol):
    async def search(
        self,
        title: str,
        result_type: ResultType | None = None,
        year: str | None = None,
    ) -> list[MetadataCandidate]: ...

    async def get_by_id(self, imdb_id: str) -> MetadataEntry: ...


class LookupResolver:
    """Resolve identifiers or normalised titles to full provider entries."""

    max_search_attempts = 2

    def __init__(self, provider: MetadataProvider):
        self._provider = provider

    async def resolve_by_id(self, imdb_id: str) -> MetadataEntry | None:
        """Return the full entry for an identifier, or ``None`` if not found."""

        entry = await self._provider.get_by_id(imdb_id)
        if not entry.found:
            logger.info("No entry found for %s: %s", imdb_id, entry.error or "not found")
            return None
        return entry

    async def resolve_by_title(self, query: SearchQuery) -> MetadataEntry | None:
        """Search for a title and return the full entry of the first hit.

        An empty search is retried once with punctuation replaced by spaces,
        unless that leaves the title unchanged.
        """

        title = query.title
        candidates: list[MetadataCandidate] = []
        attempt = 0

        while attempt < self.max_search_attempts:
            attempt += 1
            candidates = await self._provider.search(title, query.result_type, query.year)
            if candidates:
                break

            logger.info(
                "Search couldn't find %s %r and release year %s",
                _describe_type(query.result_type),
                title,
                query.year,
            )
            if attempt >= self.max_search_attempts:
                break
            retry_title = sanitize_title(title)
            if retry_title == title:
                break
            logger.info("Retrying with %r instead of %r", retry_title, title)
            title = retry_title

        if not candidates:
            return None

        if len(candidates) > 1:
            logger.warning(
                "Search for %s %r is ambiguous (%s results), picking the first one",
                _describe_type(query.result_type),
                title,
                len(candidates),
            )

        chosen = candidates[0]
        entry = await self.resolve_by_id(chosen.imdb_id)
        if entry is None:
            logger.warning(
                "Lookup of %s failed even though the search for %r matched it",
                chosen.imdb_id,
                title,
            )
        return entry


def _describe_type(result_type: ResultType | None) -> str:
    return result_type.value if result_type else "any"
