"""Module executed when running ``python -m reelsync``."""

from __future__ import annotations

import argparse
import asyncio
import logging
from contextlib import AsyncExitStack

import httpx

from .config import Settings, get_settings
from .services.airtable import AirtableClient
from .services.enrichment import EnrichmentService
from .services.omdb import OmdbClient
from .services.resolver import LookupResolver

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fill in missing catalog metadata from OMDb."
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and log updates without writing them",
    )
    return parser.parse_args(argv)


async def run(settings: Settings) -> None:
    """Open the HTTP clients and run one enrichment pass."""

    timeout = httpx.Timeout(settings.request_timeout_seconds, connect=10.0)
    async with AsyncExitStack() as exit_stack:
        airtable_http = await exit_stack.enter_async_context(
            httpx.AsyncClient(base_url=str(settings.airtable_api_url), timeout=timeout)
        )
        omdb_http = await exit_stack.enter_async_context(
            httpx.AsyncClient(base_url=str(settings.omdb_api_url), timeout=timeout)
        )

        service = EnrichmentService(
            AirtableClient(settings, airtable_http),
            LookupResolver(OmdbClient(settings, omdb_http)),
            approval_rating=settings.cover_approval_rating,
            dry_run=settings.dry_run,
        )
        await service.enrich_metadata()


def main(argv: list[str] | None = None) -> None:
    """Load settings, configure logging and run the enrichment."""

    args = parse_args(argv)
    overrides: dict[str, object] = {"DRY_RUN": True} if args.dry_run else {}
    settings = get_settings(**overrides)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    try:
        asyncio.run(run(settings))
    except httpx.HTTPError:
        logger.exception("Enrichment aborted by a transport failure")
        raise


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
