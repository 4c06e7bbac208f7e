"""Cinemeta client (Stremio's public metadata addon), via the cached fetcher."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import structlog

from voirdrama.domain.entities.metadata import MetaSummary
from voirdrama.domain.exceptions import EnrichmentUnavailable, UpstreamUnavailable
from voirdrama.domain.ports.fetcher import FetcherPort

log = structlog.get_logger(__name__)

DEFAULT_CINEMETA_URL = "https://v3-cinemeta.strem.io"


class CinemetaClient:
    """Read-only series lookups against Cinemeta.

    Implements ``MetadataPort`` from domain.ports.metadata.  Responses go
    through the fetcher, so they share the tiered cache and its TTL.
    """

    def __init__(
        self,
        *,
        fetcher: FetcherPort,
        base_url: str = DEFAULT_CINEMETA_URL,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get(self, path: str) -> dict[str, Any] | None:
        url = f"{self._base_url}{path}"
        try:
            data = await self._fetcher.fetch_json(url)
        except UpstreamUnavailable as exc:
            raise EnrichmentUnavailable(str(exc)) from exc
        if not isinstance(data, dict):
            log.debug("cinemeta_unexpected_payload", path=path)
            return None
        return data

    @staticmethod
    def _to_summary(meta: dict[str, Any]) -> MetaSummary | None:
        name = meta.get("name")
        if not isinstance(name, str) or not name:
            return None
        return MetaSummary(
            external_id=meta.get("imdb_id") or meta.get("id") or None,
            name=name,
            poster_url=meta.get("poster") or None,
            background_url=meta.get("background") or None,
        )

    # ------------------------------------------------------------------
    # Public API (MetadataPort)
    # ------------------------------------------------------------------

    async def search_by_title(self, title: str) -> list[MetaSummary]:
        if not title:
            return []
        data = await self._get(f"/catalog/series/top/search={quote(title, safe='')}.json")
        if data is None:
            return []
        metas = data.get("metas")
        if not isinstance(metas, list):
            return []

        results: list[MetaSummary] = []
        for meta in metas:
            if not isinstance(meta, dict):
                continue
            summary = self._to_summary(meta)
            if summary is not None:
                results.append(summary)
        return results

    async def lookup_by_id(self, external_id: str) -> MetaSummary | None:
        if not external_id:
            return None
        data = await self._get(f"/meta/series/{quote(external_id, safe='')}.json")
        if data is None:
            return None
        meta = data.get("meta")
        if not isinstance(meta, dict):
            log.debug("cinemeta_meta_not_found", external_id=external_id)
            return None
        return self._to_summary(meta)
