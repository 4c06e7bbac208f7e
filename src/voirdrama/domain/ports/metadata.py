"""Port for the external (read-only) metadata service."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from voirdrama.domain.entities.metadata import MetaSummary


@runtime_checkable
class MetadataPort(Protocol):
    """Lookup-by-title and lookup-by-id against a metadata service.

    Raises:
        EnrichmentUnavailable: when the service cannot be reached.
    """

    async def search_by_title(self, title: str) -> list[MetaSummary]:
        """Return all candidates for a title, in service order."""
        ...

    async def lookup_by_id(self, external_id: str) -> MetaSummary | None:
        """Return the record for an external ID, or None if unknown."""
        ...
