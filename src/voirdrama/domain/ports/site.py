"""Port for the upstream content site: URL templates plus extraction."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from voirdrama.domain.entities.catalog import CatalogEntry, SeriesDetail
from voirdrama.domain.entities.stream import StreamCandidate


@runtime_checkable
class ContentSitePort(Protocol):
    """Knows where the site keeps its pages and how to read them.

    Extraction methods are best-effort: unexpected markup yields ``None``
    or empty collections, never an exception.
    """

    def listing_url(self, page: int = 1, *, newest: bool = False) -> str: ...

    def search_url(self, query: str) -> str: ...

    def series_url(self, slug: str) -> str: ...

    def episode_url(self, series_slug: str, episode_slug: str) -> str: ...

    def parse_catalog(self, html: str) -> list[CatalogEntry]: ...

    def parse_series(self, html: str, slug: str) -> SeriesDetail: ...

    def parse_status(self, html: str) -> str | None: ...

    def parse_stream_candidates(self, html: str) -> list[StreamCandidate]: ...
