"""Series meta use case: series ID or IMDb ID -> enriched SeriesDetail."""

from __future__ import annotations

from dataclasses import replace

import structlog

from voirdrama.application.use_cases.catalog import CatalogUseCase
from voirdrama.domain.entities.catalog import SeriesDetail
from voirdrama.domain.entities.ids import is_external_id, parse_series_id
from voirdrama.domain.exceptions import UpstreamUnavailable
from voirdrama.domain.ports.enrichment import EnricherPort
from voirdrama.domain.ports.fetcher import FetcherPort
from voirdrama.domain.ports.id_index import ExternalIdIndexPort
from voirdrama.domain.ports.site import ContentSitePort

log = structlog.get_logger(__name__)


class SeriesMetaUseCase:
    """Resolves a series page into a ``SeriesDetail``.

    Accepts ``voirdrama:<slug>`` IDs directly. IMDb-style ``tt<digits>``
    IDs are mapped to a slug via the external-ID index, falling back to
    metadata lookup by ID, then a site search on the returned name.
    """

    def __init__(
        self,
        fetcher: FetcherPort,
        site: ContentSitePort,
        enricher: EnricherPort,
        catalog: CatalogUseCase,
        id_index: ExternalIdIndexPort,
    ) -> None:
        self._fetcher = fetcher
        self._site = site
        self._enricher = enricher
        self._catalog = catalog
        self._id_index = id_index

    async def _slug_for_external_id(self, external_id: str) -> str | None:
        slug = self._id_index.get(external_id)
        if slug:
            return slug

        summary = await self._enricher.find_by_id(external_id)
        if summary is None or not summary.name:
            log.debug("meta_external_id_unknown", external_id=external_id)
            return None

        entry = await self._catalog.find_by_title(summary.name)
        if entry is None:
            log.debug("meta_external_id_no_site_match", external_id=external_id, name=summary.name)
            return None

        self._id_index.record(external_id, entry.slug)
        return entry.slug

    async def get(self, series_id: str) -> SeriesDetail | None:
        external_id: str | None = None
        slug = parse_series_id(series_id)
        if slug is None and is_external_id(series_id):
            external_id = series_id
            slug = await self._slug_for_external_id(external_id)
        if slug is None:
            return None

        url = self._site.series_url(slug)
        try:
            html = await self._fetcher.fetch_text(url)
        except UpstreamUnavailable:
            log.warning("meta_fetch_failed", series_id=series_id, url=url, exc_info=True)
            return None

        detail = self._site.parse_series(html, slug)
        if external_id:
            detail = replace(detail, external_id=external_id)
        detail = await self._enricher.enrich_detail(detail)

        if detail.external_id:
            self._id_index.record(detail.external_id, slug)
        log.debug(
            "meta_resolved",
            series_id=series_id,
            slug=slug,
            episodes=len(detail.episodes),
            external_id=detail.external_id,
        )
        return detail
