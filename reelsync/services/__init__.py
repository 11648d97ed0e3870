"""Service layer for catalog enrichment."""

from .airtable import AirtableClient
from .enrichment import EnrichmentService, RecordOutcome
from .omdb import OmdbClient
from .resolver import LookupResolver

__all__ = [
    "AirtableClient",
    "EnrichmentService",
    "LookupResolver",
    "OmdbClient",
    "RecordOutcome",
]
