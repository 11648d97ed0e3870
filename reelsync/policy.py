"""Rules deciding which catalog fields an enrichment pass may change."""

from __future__ import annotations

import logging

from .config import DEFAULT_COVER_APPROVAL_RATING
from .models import CatalogRecord, FieldPatch, MetadataEntry
from .utils import parse_runtime_minutes

logger = logging.getLogger(__name__)


def cover_is_replaceable(
    record: CatalogRecord, approval_rating: str = DEFAULT_COVER_APPROVAL_RATING
) -> bool:
    """Return whether a provider poster may be attached to the record.

    An existing cover is never replaced. Without one, a poster is only
    fetched when both reviews carry the top rating.
    """

    if record.has_cover:
        return False
    return (
        record.first_review is not None
        and record.first_review == record.second_review
        and record.first_review == approval_rating
    )


def is_complete(record: CatalogRecord) -> bool:
    """True when cover, runtime and release year are all filled in."""

    return bool(record.has_cover and record.runtime_minutes and record.release_year)


def build_patch(
    record: CatalogRecord,
    entry: MetadataEntry,
    *,
    approval_rating: str = DEFAULT_COVER_APPROVAL_RATING,
) -> FieldPatch:
    """Compute the minimal set of changes the provider entry justifies."""

    patch = FieldPatch()

    if not record.imdb_id and entry.imdb_id:
        patch.imdb_id = entry.imdb_id

    if cover_is_replaceable(record, approval_rating) and entry.poster:
        patch.cover_url = entry.poster

    if not record.runtime_minutes and entry.runtime:
        runtime = parse_runtime_minutes(entry.runtime)
        if runtime is None:
            logger.info(
                "Ignoring unparsable runtime %r for %s", entry.runtime, record.label()
            )
        else:
            patch.runtime_minutes = runtime

    # Shows can end or be rebooted, so a differing year is taken over.
    if entry.year and record.release_year != entry.year:
        patch.release_year = entry.year

    return patch
