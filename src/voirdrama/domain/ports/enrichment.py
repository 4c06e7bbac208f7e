"""Port for opportunistic metadata enrichment."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from voirdrama.domain.entities.catalog import CatalogEntry, SeriesDetail
from voirdrama.domain.entities.metadata import MetaSummary


@runtime_checkable
class EnricherPort(Protocol):
    """Overlays artwork and external IDs. Implementations never raise."""

    async def find_by_id(self, external_id: str) -> MetaSummary | None: ...

    async def enrich_entries(self, entries: list[CatalogEntry]) -> list[CatalogEntry]: ...

    async def enrich_detail(self, detail: SeriesDetail) -> SeriesDetail: ...
