"""Tests for the Cinemeta metadata client."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from voirdrama.domain.entities.metadata import MetaSummary
from voirdrama.domain.exceptions import EnrichmentUnavailable, UpstreamUnavailable
from voirdrama.infrastructure.metadata.cinemeta import CinemetaClient

_BASE = "https://v3-cinemeta.strem.io"


@pytest.fixture()
def json_fetcher() -> AsyncMock:
    return AsyncMock()


@pytest.fixture()
def client(json_fetcher: AsyncMock) -> CinemetaClient:
    return CinemetaClient(fetcher=json_fetcher, base_url=_BASE + "/")


class TestSearchByTitle:
    @pytest.mark.asyncio
    async def test_builds_url_and_maps_records(
        self, client: CinemetaClient, json_fetcher: AsyncMock
    ) -> None:
        json_fetcher.fetch_json.return_value = {
            "metas": [
                {"id": "tt13028590", "name": "Moving", "poster": "https://img/p.jpg"},
                {"id": "tt0000001", "name": ""},
                "garbage",
            ]
        }

        results = await client.search_by_title("Moving & Co")

        json_fetcher.fetch_json.assert_awaited_once_with(
            f"{_BASE}/catalog/series/top/search=Moving%20%26%20Co.json"
        )
        assert results == [
            MetaSummary(external_id="tt13028590", name="Moving", poster_url="https://img/p.jpg")
        ]

    @pytest.mark.asyncio
    async def test_imdb_id_preferred(self, client: CinemetaClient, json_fetcher: AsyncMock) -> None:
        json_fetcher.fetch_json.return_value = {
            "metas": [{"id": "cm:1", "imdb_id": "tt42", "name": "X"}]
        }
        results = await client.search_by_title("X")
        assert results[0].external_id == "tt42"

    @pytest.mark.asyncio
    async def test_empty_title_skips_request(
        self, client: CinemetaClient, json_fetcher: AsyncMock
    ) -> None:
        assert await client.search_by_title("") == []
        json_fetcher.fetch_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_payload(self, client: CinemetaClient, json_fetcher: AsyncMock) -> None:
        json_fetcher.fetch_json.return_value = ["not", "a", "dict"]
        assert await client.search_by_title("Moving") == []

    @pytest.mark.asyncio
    async def test_upstream_failure_raises_enrichment_unavailable(
        self, client: CinemetaClient, json_fetcher: AsyncMock
    ) -> None:
        json_fetcher.fetch_json.side_effect = UpstreamUnavailable(_BASE, "timeout")
        with pytest.raises(EnrichmentUnavailable):
            await client.search_by_title("Moving")


class TestLookupById:
    @pytest.mark.asyncio
    async def test_found(self, client: CinemetaClient, json_fetcher: AsyncMock) -> None:
        json_fetcher.fetch_json.return_value = {
            "meta": {
                "id": "tt13028590",
                "name": "Moving",
                "poster": "https://img/p.jpg",
                "background": "https://img/b.jpg",
            }
        }

        summary = await client.lookup_by_id("tt13028590")

        json_fetcher.fetch_json.assert_awaited_once_with(f"{_BASE}/meta/series/tt13028590.json")
        assert summary == MetaSummary(
            external_id="tt13028590",
            name="Moving",
            poster_url="https://img/p.jpg",
            background_url="https://img/b.jpg",
        )

    @pytest.mark.asyncio
    async def test_missing_meta(self, client: CinemetaClient, json_fetcher: AsyncMock) -> None:
        json_fetcher.fetch_json.return_value = {}
        assert await client.lookup_by_id("tt1") is None
