"""Reconcile catalog rows against the metadata provider."""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Any, Protocol

from ..config import DEFAULT_COVER_APPROVAL_RATING
from ..models import CatalogRecord, FieldPatch, MetadataEntry
from ..policy import build_patch, is_complete
from ..utils import normalize_title
from .resolver import LookupResolver

logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    async def list_all(self) -> list[CatalogRecord]: ...

    async def apply_patch(
        self, record_id: str, patch: FieldPatch, *, typecast: bool = True
    ) -> Any: ...


class RecordOutcome(str, Enum):
    """How processing a single record ended."""

    UPDATED = "updated"
    SKIPPED_COMPLETE = "skipped, already complete"
    SKIPPED_NOTHING_TO_UPDATE = "skipped, nothing to update"
    NO_MATCH = "no match"


class EnrichmentService:
    """Fill in identifiers, covers, runtimes and release years one row at a time.

    Rows that already carry an IMDb identifier are handled first, in listing
    order, followed by the rows that need a title search. Provider and store
    errors are not caught here; they abort the run.
    """

    def __init__(
        self,
        store: CatalogStore,
        resolver: LookupResolver,
        *,
        approval_rating: str = DEFAULT_COVER_APPROVAL_RATING,
        dry_run: bool = False,
    ):
        self._store = store
        self._resolver = resolver
        self._approval_rating = approval_rating
        self._dry_run = dry_run

    async def enrich_metadata(self) -> None:
        """Run one reconciliation pass over the whole catalog."""

        records = await self._store.list_all()
        with_id = [record for record in records if record.imdb_id]
        without_id = [record for record in records if not record.imdb_id]
        logger.info(
            "Reconciling %s records (%s with an IMDb id, %s to search)",
            len(records),
            len(with_id),
            len(without_id),
        )

        outcomes: Counter[RecordOutcome] = Counter()
        for record in [*with_id, *without_id]:
            outcomes[await self.reconcile_record(record)] += 1

        logger.info(
            "Finished: %s",
            ", ".join(
                f"{outcome.value}={outcomes[outcome]}" for outcome in RecordOutcome
            ),
        )

    async def reconcile_record(self, record: CatalogRecord) -> RecordOutcome:
        """Process a single record and report how it ended."""

        if record.imdb_id:
            if is_complete(record):
                logger.info("Skipping update for %s, already complete", record.label())
                return RecordOutcome.SKIPPED_COMPLETE
            entry = await self._resolver.resolve_by_id(record.imdb_id)
        else:
            query = normalize_title(record.title, record.format)
            entry = await self._resolver.resolve_by_title(query)

        if entry is None:
            return RecordOutcome.NO_MATCH
        return await self._apply_entry(record, entry)

    async def _apply_entry(
        self, record: CatalogRecord, entry: MetadataEntry
    ) -> RecordOutcome:
        if is_complete(record):
            logger.info("Skipping update for %s, nothing to update", record.label())
            return RecordOutcome.SKIPPED_NOTHING_TO_UPDATE

        patch = build_patch(record, entry, approval_rating=self._approval_rating)
        if patch.is_empty():
            logger.info(
                "Didn't end up updating, nothing to update %s", record.label()
            )
            return RecordOutcome.SKIPPED_NOTHING_TO_UPDATE

        logger.info("UPDATING ROW %s: %s", record.label(), patch.to_fields())
        if self._dry_run:
            logger.info("Dry run, not writing %s", record.label())
        else:
            await self._store.apply_patch(record.record_id, patch, typecast=True)
        return RecordOutcome.UPDATED
