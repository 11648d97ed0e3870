"""Tests for the Airtable catalog client."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import build_settings
from reelsync.models import FieldPatch
from reelsync.services.airtable import AirtableClient


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://airtable.example.com/v0"
    )


@pytest.mark.anyio("asyncio")
async def test_list_all_follows_offset_cursor() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.params.get("offset") == "itrNext":
            return httpx.Response(
                200, json={"records": [{"id": "rec3", "fields": {"title": "Third"}}]}
            )
        return httpx.Response(
            200,
            json={
                "records": [
                    {"id": "rec1", "fields": {"title": "First", "imdb id": "tt1"}},
                    {"id": "rec2", "fields": {"title": "Second"}},
                ],
                "offset": "itrNext",
            },
        )

    async with _client(handler) as http_client:
        records = await AirtableClient(build_settings(), http_client).list_all()

    assert [record.record_id for record in records] == ["rec1", "rec2", "rec3"]
    assert records[0].imdb_id == "tt1"
    assert len(requests) == 2
    assert requests[0].url.path == "/v0/appBase/tblMovies"
    assert requests[0].headers["Authorization"] == "Bearer pat-test"
    assert "offset" not in requests[0].url.params


@pytest.mark.anyio("asyncio")
async def test_apply_patch_sends_typecast_fields() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"id": "rec1", "fields": {}})

    patch = FieldPatch(imdb_id="tt1", cover_url="https://img.example.com/p.jpg")
    async with _client(handler) as http_client:
        await AirtableClient(build_settings(), http_client).apply_patch("rec1", patch)

    request = requests[0]
    assert request.method == "PATCH"
    assert request.url.path == "/v0/appBase/tblMovies/rec1"
    assert json.loads(request.content) == {
        "fields": {"imdb id": "tt1", "cover": [{"url": "https://img.example.com/p.jpg"}]},
        "typecast": True,
    }


@pytest.mark.anyio("asyncio")
async def test_store_errors_propagate() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"error": {"type": "INVALID_VALUE_FOR_COLUMN"}})

    async with _client(handler) as http_client:
        client = AirtableClient(build_settings(), http_client)
        with pytest.raises(httpx.HTTPStatusError):
            await client.apply_patch("rec1", FieldPatch(release_year="2020"))
