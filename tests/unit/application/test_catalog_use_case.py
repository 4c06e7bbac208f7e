"""Tests for CatalogUseCase (listing, search, ongoing scan, dispatch)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from voirdrama.application.use_cases.catalog import (
    CATALOG_ONGOING,
    CATALOG_RECENT,
    CATALOG_SEARCH,
    CatalogUseCase,
    page_for_skip,
)
from voirdrama.domain.entities.catalog import CatalogEntry
from voirdrama.domain.exceptions import UpstreamUnavailable
from voirdrama.infrastructure.voirdrama import VoirdramaSite

_BASE = "https://voirdrama.org"


def _listing(*slugs: str) -> str:
    return "".join(
        f'<h3><a href="{_BASE}/drama/{slug}/">{slug.title()}</a></h3>' for slug in slugs
    )


def _series(status: str) -> str:
    return (
        '<div class="summary-heading"><h5>Status</h5></div>'
        f'<div class="summary-content">{status}</div>'
    )


class _FakeSite:
    """Routes fetch(url) to canned pages; unknown URLs fail upstream."""

    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.requested: list[str] = []

    async def fetch(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.pages:
            raise UpstreamUnavailable(url, "HTTP 404")
        return self.pages[url]


@pytest.fixture()
def use_case(
    fetcher: AsyncMock, site: VoirdramaSite, enricher: AsyncMock, id_index: MagicMock
) -> CatalogUseCase:
    return CatalogUseCase(fetcher, site, enricher, id_index)


class TestPageForSkip:
    @pytest.mark.parametrize(
        ("skip", "page"),
        [(0, 1), (9, 1), (10, 2), (19, 2), (20, 3), (-5, 1)],
    )
    def test_mapping(self, skip: int, page: int) -> None:
        assert page_for_skip(skip, 10) == page


class TestListing:
    @pytest.mark.asyncio
    async def test_first_page(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, listing_html: str
    ) -> None:
        fetcher.fetch_text.return_value = listing_html

        entries = await use_case.listing()

        fetcher.fetch_text.assert_awaited_once_with(f"{_BASE}/drama/")
        assert [e.slug for e in entries] == ["moving", "queen-of-tears"]

    @pytest.mark.asyncio
    async def test_newest_order_and_skip(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, listing_html: str
    ) -> None:
        fetcher.fetch_text.return_value = listing_html

        await use_case.listing(skip=10, newest=True)

        fetcher.fetch_text.assert_awaited_once_with(
            f"{_BASE}/drama/page/2/?m_orderby=new-manga"
        )

    @pytest.mark.asyncio
    async def test_upstream_failure_yields_empty(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, enricher: AsyncMock
    ) -> None:
        fetcher.fetch_text.side_effect = UpstreamUnavailable(f"{_BASE}/drama/", "timeout")

        assert await use_case.listing() == []
        enricher.enrich_entries.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_enriched_ids_are_recorded(
        self,
        use_case: CatalogUseCase,
        fetcher: AsyncMock,
        enricher: AsyncMock,
        id_index: MagicMock,
        listing_html: str,
    ) -> None:
        fetcher.fetch_text.return_value = listing_html
        enricher.enrich_entries.side_effect = lambda entries: [
            CatalogEntry(id=e.id, slug=e.slug, name=e.name, external_id="tt1")
            if e.slug == "moving"
            else e
            for e in entries
        ]

        entries = await use_case.listing()

        assert entries[0].external_id == "tt1"
        id_index.record.assert_called_once_with("tt1", "moving")


class TestSearch:
    @pytest.mark.asyncio
    async def test_query_is_encoded(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, listing_html: str
    ) -> None:
        fetcher.fetch_text.return_value = listing_html

        entries = await use_case.search("queen of tears")

        fetcher.fetch_text.assert_awaited_once_with(
            f"{_BASE}/?s=queen%20of%20tears&post_type=wp-manga"
        )
        assert len(entries) == 2

    @pytest.mark.asyncio
    async def test_blank_query_falls_back_to_listing(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, listing_html: str
    ) -> None:
        fetcher.fetch_text.return_value = listing_html

        await use_case.search("   ")

        fetcher.fetch_text.assert_awaited_once_with(f"{_BASE}/drama/")

    @pytest.mark.asyncio
    async def test_find_by_title_prefers_exact_match(
        self, use_case: CatalogUseCase, fetcher: AsyncMock
    ) -> None:
        fetcher.fetch_text.return_value = (
            f'<a href="{_BASE}/drama/moving-on/">Moving On</a>'
            f'<a href="{_BASE}/drama/moving/">MOVING</a>'
        )

        entry = await use_case.find_by_title("Moving")

        assert entry is not None and entry.slug == "moving"

    @pytest.mark.asyncio
    async def test_find_by_title_first_hit_otherwise(
        self, use_case: CatalogUseCase, fetcher: AsyncMock
    ) -> None:
        fetcher.fetch_text.return_value = (
            f'<a href="{_BASE}/drama/moving-on/">Moving On</a>'
            f'<a href="{_BASE}/drama/moving-2/">Moving 2</a>'
        )

        entry = await use_case.find_by_title("Moving")

        assert entry is not None and entry.slug == "moving-on"

    @pytest.mark.asyncio
    async def test_find_by_title_nothing(
        self, use_case: CatalogUseCase, fetcher: AsyncMock
    ) -> None:
        fetcher.fetch_text.return_value = "<p>Aucun résultat</p>"
        assert await use_case.find_by_title("Moving") is None


class TestOngoing:
    @pytest.mark.asyncio
    async def test_filters_by_status(
        self, use_case: CatalogUseCase, fetcher: AsyncMock
    ) -> None:
        fake = _FakeSite(
            {
                f"{_BASE}/drama/": _listing("a", "b", "c"),
                f"{_BASE}/drama/a/": _series("En cours"),
                f"{_BASE}/drama/b/": _series("Terminé"),
                f"{_BASE}/drama/c/": _series("OnGoing"),
            }
        )
        fetcher.fetch_text.side_effect = fake.fetch

        entries = await use_case.ongoing()

        assert [e.slug for e in entries] == ["a", "c"]
        # Page 2 fails to fetch, which ends the scan.
        assert f"{_BASE}/drama/page/2/" in fake.requested
        assert f"{_BASE}/drama/page/3/" not in fake.requested

    @pytest.mark.asyncio
    async def test_page_without_entries_does_not_end_scan(
        self, use_case: CatalogUseCase, fetcher: AsyncMock
    ) -> None:
        fake = _FakeSite(
            {
                f"{_BASE}/drama/": _listing("a"),
                f"{_BASE}/drama/a/": _series("Terminé"),
                f"{_BASE}/drama/page/2/": "<html><body>maintenance</body></html>",
                f"{_BASE}/drama/page/3/": _listing("c"),
                f"{_BASE}/drama/c/": _series("En cours"),
            }
        )
        fetcher.fetch_text.side_effect = fake.fetch

        entries = await use_case.ongoing()

        assert [e.slug for e in entries] == ["c"]
        assert f"{_BASE}/drama/page/4/" in fake.requested

    @pytest.mark.asyncio
    async def test_no_match_scans_max_pages(
        self, use_case: CatalogUseCase, fetcher: AsyncMock
    ) -> None:
        pages = {f"{_BASE}/drama/": _listing("s1"), f"{_BASE}/drama/s1/": _series("Terminé")}
        for page in range(2, 20):
            pages[f"{_BASE}/drama/page/{page}/"] = _listing(f"s{page}")
            pages[f"{_BASE}/drama/s{page}/"] = _series("Terminé")
        fake = _FakeSite(pages)
        fetcher.fetch_text.side_effect = fake.fetch

        assert await use_case.ongoing() == []

        listing_fetches = [u for u in fake.requested if "/drama/page/" in u or u == f"{_BASE}/drama/"]
        assert len(listing_fetches) == 12

    @pytest.mark.asyncio
    async def test_skip_applies_to_matches(
        self, fetcher: AsyncMock, site: VoirdramaSite, enricher: AsyncMock, id_index: MagicMock
    ) -> None:
        use_case = CatalogUseCase(fetcher, site, enricher, id_index, page_size=2)
        slugs = ["a", "b", "c", "d", "e"]
        pages = {f"{_BASE}/drama/": _listing(*slugs)}
        for slug in slugs:
            pages[f"{_BASE}/drama/{slug}/"] = _series("En cours" if slug != "b" else "Terminé")
        fetcher.fetch_text.side_effect = _FakeSite(pages).fetch

        entries = await use_case.ongoing(skip=2)

        # Matches are a, c, d, e; skipping two leaves d, e.
        assert [e.slug for e in entries] == ["d", "e"]

    @pytest.mark.asyncio
    async def test_stops_once_page_is_full(
        self, fetcher: AsyncMock, site: VoirdramaSite, enricher: AsyncMock, id_index: MagicMock
    ) -> None:
        use_case = CatalogUseCase(fetcher, site, enricher, id_index, page_size=1)
        fake = _FakeSite(
            {
                f"{_BASE}/drama/": _listing("a", "b"),
                f"{_BASE}/drama/a/": _series("En cours"),
                f"{_BASE}/drama/b/": _series("En cours"),
            }
        )
        fetcher.fetch_text.side_effect = fake.fetch

        entries = await use_case.ongoing()

        assert [e.slug for e in entries] == ["a"]
        assert f"{_BASE}/drama/b/" not in fake.requested

    @pytest.mark.asyncio
    async def test_failed_status_fetch_counts_as_not_ongoing(
        self, use_case: CatalogUseCase, fetcher: AsyncMock
    ) -> None:
        fetcher.fetch_text.side_effect = _FakeSite(
            {
                f"{_BASE}/drama/": _listing("a", "b"),
                f"{_BASE}/drama/b/": _series("En cours"),
            }
        ).fetch

        entries = await use_case.ongoing()

        assert [e.slug for e in entries] == ["b"]

    @pytest.mark.asyncio
    async def test_first_page_failure_yields_empty(
        self, use_case: CatalogUseCase, fetcher: AsyncMock
    ) -> None:
        fetcher.fetch_text.side_effect = _FakeSite({}).fetch
        assert await use_case.ongoing() == []


class TestListCatalog:
    @pytest.mark.asyncio
    async def test_unknown_id(self, use_case: CatalogUseCase, fetcher: AsyncMock) -> None:
        assert await use_case.list_catalog("voirdrama-unknown", search="moving") == []
        fetcher.fetch_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_recent_uses_newest_listing(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, listing_html: str
    ) -> None:
        fetcher.fetch_text.return_value = listing_html

        await use_case.list_catalog(CATALOG_RECENT, skip=20)

        fetcher.fetch_text.assert_awaited_once_with(
            f"{_BASE}/drama/page/3/?m_orderby=new-manga"
        )

    @pytest.mark.asyncio
    async def test_search_catalog(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, listing_html: str
    ) -> None:
        fetcher.fetch_text.return_value = listing_html

        await use_case.list_catalog(CATALOG_SEARCH, search="moving")

        fetcher.fetch_text.assert_awaited_once_with(f"{_BASE}/?s=moving&post_type=wp-manga")

    @pytest.mark.asyncio
    async def test_search_extra_overrides_known_catalog(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, listing_html: str
    ) -> None:
        fetcher.fetch_text.return_value = listing_html

        await use_case.list_catalog(CATALOG_ONGOING, search="moving")

        fetcher.fetch_text.assert_awaited_once_with(f"{_BASE}/?s=moving&post_type=wp-manga")

    @pytest.mark.asyncio
    async def test_search_catalog_without_query_lists(
        self, use_case: CatalogUseCase, fetcher: AsyncMock, listing_html: str
    ) -> None:
        fetcher.fetch_text.return_value = listing_html

        entries = await use_case.list_catalog(CATALOG_SEARCH)

        fetcher.fetch_text.assert_awaited_once_with(f"{_BASE}/drama/")
        assert len(entries) == 2
