"""Opportunistic artwork/ID enrichment from the metadata service."""

from __future__ import annotations

from dataclasses import replace

import structlog

from voirdrama.domain.entities.catalog import CatalogEntry, SeriesDetail
from voirdrama.domain.entities.metadata import MetaOverlay, MetaSummary
from voirdrama.domain.exceptions import EnrichmentUnavailable
from voirdrama.domain.ports.metadata import MetadataPort
from voirdrama.domain.title import normalize_title

log = structlog.get_logger(__name__)


def pick_best_match(title: str, candidates: list[MetaSummary]) -> MetaSummary | None:
    """First exact normalized-title match, else the first candidate."""
    if not candidates:
        return None
    target = normalize_title(title)
    for candidate in candidates:
        if normalize_title(candidate.name) == target:
            return candidate
    return candidates[0]


def apply_to_entry(entry: CatalogEntry, overlay: MetaOverlay | None) -> CatalogEntry:
    """Overlay non-empty fields; keep extracted values otherwise."""
    if overlay is None or overlay.is_empty:
        return entry
    return replace(
        entry,
        poster_url=overlay.poster_url or entry.poster_url,
        background_url=overlay.background_url or entry.background_url,
        external_id=overlay.external_id or entry.external_id,
    )


def apply_to_detail(detail: SeriesDetail, overlay: MetaOverlay | None) -> SeriesDetail:
    """Overlay non-empty fields; keep extracted values otherwise."""
    if overlay is None or overlay.is_empty:
        return detail
    return replace(
        detail,
        poster_url=overlay.poster_url or detail.poster_url,
        background_url=overlay.background_url or detail.background_url,
        external_id=overlay.external_id or detail.external_id,
    )


class MetadataEnricher:
    """Looks up overlays by title or external ID.

    Never raises: service failures and empty results both yield ``None``
    so that enrichment cannot block the primary response.
    """

    def __init__(self, metadata: MetadataPort, *, enabled: bool = True) -> None:
        self._metadata = metadata
        self.enabled = enabled

    async def find_by_title(self, title: str) -> MetaSummary | None:
        if not self.enabled or not title:
            return None
        try:
            candidates = await self._metadata.search_by_title(title)
        except EnrichmentUnavailable:
            log.warning("enrichment_unavailable", lookup="title", title=title, exc_info=True)
            return None
        match = pick_best_match(title, candidates)
        if match is None:
            log.debug("enrichment_no_match", title=title)
        return match

    async def find_by_id(self, external_id: str) -> MetaSummary | None:
        if not self.enabled or not external_id:
            return None
        try:
            return await self._metadata.lookup_by_id(external_id)
        except EnrichmentUnavailable:
            log.warning(
                "enrichment_unavailable",
                lookup="id",
                external_id=external_id,
                exc_info=True,
            )
            return None

    async def overlay_for_title(self, title: str) -> MetaOverlay | None:
        summary = await self.find_by_title(title)
        return MetaOverlay.from_summary(summary) if summary else None

    async def overlay_for_id(self, external_id: str) -> MetaOverlay | None:
        summary = await self.find_by_id(external_id)
        return MetaOverlay.from_summary(summary) if summary else None

    async def enrich_entries(self, entries: list[CatalogEntry]) -> list[CatalogEntry]:
        """Overlay each entry by its display name, sequentially, order kept."""
        if not self.enabled:
            return list(entries)
        enriched: list[CatalogEntry] = []
        for entry in entries:
            overlay = await self.overlay_for_title(entry.name)
            enriched.append(apply_to_entry(entry, overlay))
        return enriched

    async def enrich_detail(self, detail: SeriesDetail) -> SeriesDetail:
        """Overlay by external ID when one is known, else by display name."""
        if not self.enabled:
            return detail
        if detail.external_id:
            overlay = await self.overlay_for_id(detail.external_id)
        else:
            overlay = await self.overlay_for_title(detail.name)
        return apply_to_detail(detail, overlay)
