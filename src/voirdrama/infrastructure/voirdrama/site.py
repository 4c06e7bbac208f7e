"""VoirDrama implementation of the content-site port."""

from __future__ import annotations

from voirdrama.domain.entities.catalog import CatalogEntry, SeriesDetail
from voirdrama.domain.entities.stream import StreamCandidate
from voirdrama.infrastructure.voirdrama import parsers
from voirdrama.infrastructure.voirdrama.urls import DEFAULT_BASE_URL, SiteUrls


class VoirdramaSite:
    """Binds the URL templates of one base URL to the markup parsers."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self.urls = SiteUrls(base_url)

    @property
    def base_url(self) -> str:
        return self.urls.base_url

    def listing_url(self, page: int = 1, *, newest: bool = False) -> str:
        return self.urls.listing(page, newest=newest)

    def search_url(self, query: str) -> str:
        return self.urls.search(query)

    def series_url(self, slug: str) -> str:
        return self.urls.series(slug)

    def episode_url(self, series_slug: str, episode_slug: str) -> str:
        return self.urls.episode(series_slug, episode_slug)

    def parse_catalog(self, html: str) -> list[CatalogEntry]:
        return parsers.parse_catalog(html, self.urls)

    def parse_series(self, html: str, slug: str) -> SeriesDetail:
        return parsers.parse_series(html, slug, self.urls)

    def parse_status(self, html: str) -> str | None:
        return parsers.parse_status(html)

    def parse_stream_candidates(self, html: str) -> list[StreamCandidate]:
        return parsers.parse_stream_candidates(html)
