"""Client for reading and patching rows of the Airtable catalog table."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..models import CatalogRecord, FieldPatch

logger = logging.getLogger(__name__)


class AirtableClient:
    """Thin wrapper around the Airtable REST API for a single table."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client

    @property
    def _table_path(self) -> str:
        return f"/{self._settings.airtable_base_id}/{self._settings.airtable_table_id}"

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._settings.airtable_api_key}"}

    async def list_all(self) -> list[CatalogRecord]:
        """Return every row of the table in listing order."""

        records: list[CatalogRecord] = []
        offset: str | None = None
        page = 1

        while True:
            params: dict[str, str] = {}
            if offset:
                params["offset"] = offset
            response = await self._client.get(
                self._table_path, headers=self._headers(), params=params
            )
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError("Unexpected Airtable response structure")

            rows: list[dict[str, Any]] = data.get("records") or []
            records.extend(CatalogRecord.from_airtable(row) for row in rows)
            logger.debug("Fetched page %s with %s catalog rows", page, len(rows))

            offset = data.get("offset")
            if not offset:
                break
            page += 1

        return records

    async def apply_patch(
        self, record_id: str, patch: FieldPatch, *, typecast: bool = True
    ) -> dict[str, Any]:
        """Write the patched fields of one row and return the updated row."""

        response = await self._client.patch(
            f"{self._table_path}/{record_id}",
            headers=self._headers(),
            json={"fields": patch.to_fields(), "typecast": typecast},
        )
        response.raise_for_status()
        return response.json()
