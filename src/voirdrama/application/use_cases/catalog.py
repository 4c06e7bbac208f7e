"""Catalog assembly: paged listing, search and the "ongoing" scan."""

from __future__ import annotations

import structlog

from voirdrama.domain.entities.catalog import CatalogEntry
from voirdrama.domain.exceptions import UpstreamUnavailable
from voirdrama.domain.ports.enrichment import EnricherPort
from voirdrama.domain.ports.fetcher import FetcherPort
from voirdrama.domain.ports.id_index import ExternalIdIndexPort
from voirdrama.domain.ports.site import ContentSitePort
from voirdrama.domain.title import normalize_title

log = structlog.get_logger(__name__)

CATALOG_ONGOING = "voirdrama-ongoing"
CATALOG_RECENT = "voirdrama-recent"
CATALOG_SEARCH = "voirdrama-search"

DEFAULT_PAGE_SIZE = 10
DEFAULT_ONGOING_MAX_PAGES = 12
DEFAULT_ONGOING_STATUSES = ("ongoing", "en cours")


def page_for_skip(skip: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Map a Stremio ``skip`` offset to a 1-based upstream page number."""
    return max(0, skip) // page_size + 1


class CatalogUseCase:
    """Builds catalog pages from upstream listing and search pages.

    Primary fetch failures yield ``[]``. Enrichment runs after selection,
    so only the returned entries cost metadata lookups.
    """

    def __init__(
        self,
        fetcher: FetcherPort,
        site: ContentSitePort,
        enricher: EnricherPort,
        id_index: ExternalIdIndexPort,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        ongoing_max_pages: int = DEFAULT_ONGOING_MAX_PAGES,
        ongoing_statuses: tuple[str, ...] = DEFAULT_ONGOING_STATUSES,
    ) -> None:
        self._fetcher = fetcher
        self._site = site
        self._enricher = enricher
        self._id_index = id_index
        self.page_size = page_size
        self.ongoing_max_pages = ongoing_max_pages
        self.ongoing_statuses = tuple(s.lower() for s in ongoing_statuses)

    def page_for_skip(self, skip: int) -> int:
        return page_for_skip(skip, self.page_size)

    async def _fetch_entries(self, url: str) -> list[CatalogEntry] | None:
        try:
            html = await self._fetcher.fetch_text(url)
        except UpstreamUnavailable:
            log.warning("catalog_fetch_failed", url=url, exc_info=True)
            return None
        return self._site.parse_catalog(html)

    async def _finish(self, entries: list[CatalogEntry]) -> list[CatalogEntry]:
        enriched = await self._enricher.enrich_entries(entries)
        for entry in enriched:
            if entry.external_id:
                self._id_index.record(entry.external_id, entry.slug)
        return enriched

    async def listing(self, skip: int = 0, *, newest: bool = False) -> list[CatalogEntry]:
        """One upstream listing page, chosen by offset."""
        page = self.page_for_skip(skip)
        entries = await self._fetch_entries(self._site.listing_url(page, newest=newest))
        if entries is None:
            return []
        log.debug("catalog_listing", page=page, newest=newest, count=len(entries))
        return await self._finish(entries)

    async def _search_raw(self, query: str) -> list[CatalogEntry]:
        entries = await self._fetch_entries(self._site.search_url(query))
        return entries or []

    async def search(self, query: str) -> list[CatalogEntry]:
        """All matches of a single search response (no pagination)."""
        query = query.strip()
        if not query:
            return await self.listing()
        entries = await self._search_raw(query)
        log.debug("catalog_search", query=query, count=len(entries))
        return await self._finish(entries)

    async def find_by_title(self, title: str) -> CatalogEntry | None:
        """Resolve one known title: exact normalized match, else first hit."""
        entries = await self._search_raw(title)
        if not entries:
            return None
        target = normalize_title(title)
        for entry in entries:
            if normalize_title(entry.name) == target:
                return entry
        return entries[0]

    async def _is_ongoing(self, entry: CatalogEntry) -> bool:
        try:
            html = await self._fetcher.fetch_text(self._site.series_url(entry.slug))
        except UpstreamUnavailable:
            log.debug("ongoing_status_fetch_failed", slug=entry.slug)
            return False
        status = (self._site.parse_status(html) or "").lower()
        return any(word in status for word in self.ongoing_statuses)

    async def ongoing(self, skip: int = 0) -> list[CatalogEntry]:
        """Scan listing pages, keeping series whose status reads as ongoing.

        Costs one series-page fetch per listing entry inspected. The scan
        ends after ``page_size`` matches, a listing page that fails to fetch,
        or ``ongoing_max_pages`` pages. A page with no extractable entries
        still counts toward the ceiling but does not end the scan.
        """
        skip = max(0, skip)
        matches: list[CatalogEntry] = []
        skipped = 0
        pages_scanned = 0
        status_checks = 0

        for page in range(1, self.ongoing_max_pages + 1):
            entries = await self._fetch_entries(self._site.listing_url(page))
            if entries is None:
                break
            pages_scanned += 1
            if not entries:
                log.debug("catalog_ongoing_empty_page", page=page)
                continue

            for entry in entries:
                status_checks += 1
                if not await self._is_ongoing(entry):
                    continue
                if skipped < skip:
                    skipped += 1
                    continue
                matches.append(entry)
                if len(matches) >= self.page_size:
                    break

            if len(matches) >= self.page_size:
                break

        log.info(
            "catalog_ongoing_scanned",
            skip=skip,
            matches=len(matches),
            pages_scanned=pages_scanned,
            status_checks=status_checks,
        )
        return await self._finish(matches)

    async def list_catalog(
        self,
        catalog_id: str,
        *,
        skip: int = 0,
        search: str | None = None,
    ) -> list[CatalogEntry]:
        """Dispatch on catalog ID. Unknown IDs yield ``[]``.

        A non-empty ``search`` extra turns any known catalog into a search.
        """
        if catalog_id not in (CATALOG_ONGOING, CATALOG_RECENT, CATALOG_SEARCH):
            log.debug("catalog_unknown", catalog_id=catalog_id)
            return []
        if catalog_id == CATALOG_SEARCH or (search and search.strip()):
            return await self.search(search or "")
        if catalog_id == CATALOG_ONGOING:
            return await self.ongoing(skip)
        return await self.listing(skip, newest=True)
