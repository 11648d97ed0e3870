"""Client for the Open Movie Database (OMDb) HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..models import MetadataCandidate, MetadataEntry, ResultType

logger = logging.getLogger(__name__)


class OmdbClient:
    """Thin wrapper around the OMDb search and lookup endpoints.

    OMDb signals "nothing found" with ``"Response": "False"`` in an otherwise
    successful response. Those are returned as empty results; HTTP and network
    failures are raised to the caller.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client

    async def search(
        self,
        title: str,
        result_type: ResultType | None = None,
        year: str | None = None,
    ) -> list[MetadataCandidate]:
        """Search titles, optionally narrowed by type and release year."""

        params: dict[str, str] = {"s": title}
        if result_type:
            params["type"] = result_type.value
        if year:
            params["y"] = year

        payload = await self._get(params)
        if not _is_success(payload):
            logger.debug("OMDb search for %r returned nothing: %s", title, payload.get("Error"))
            return []

        results = payload.get("Search") or []
        candidates: list[MetadataCandidate] = []
        for raw in results:
            if not isinstance(raw, dict):
                continue
            try:
                candidate = MetadataCandidate.model_validate(raw)
            except ValidationError:
                logger.warning("Skipping malformed OMDb search result: %s", raw)
                continue
            if candidate.imdb_id:
                candidates.append(candidate)
        return candidates

    async def get_by_id(self, imdb_id: str) -> MetadataEntry:
        """Fetch the full entry for an IMDb identifier."""

        payload = await self._get({"i": imdb_id})
        return MetadataEntry.model_validate(payload)

    async def _get(self, params: dict[str, str]) -> dict[str, Any]:
        response = await self._client.get(
            "", params={"apikey": self._settings.omdb_api_key, **params}
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Unexpected OMDb response structure")
        return data


def _is_success(payload: dict[str, Any]) -> bool:
    return str(payload.get("Response", "")).strip().lower() == "true"
