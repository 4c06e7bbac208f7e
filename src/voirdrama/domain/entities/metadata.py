"""Value objects exchanged with the external metadata service."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MetaSummary:
    """A single series record returned by the metadata service."""

    external_id: str | None
    name: str
    poster_url: str | None = None
    background_url: str | None = None


@dataclass(frozen=True)
class MetaOverlay:
    """Fields to lay over extracted records. ``None`` means "keep original"."""

    poster_url: str | None = None
    background_url: str | None = None
    external_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.poster_url or self.background_url or self.external_id)

    @classmethod
    def from_summary(cls, summary: MetaSummary) -> MetaOverlay:
        return cls(
            poster_url=summary.poster_url or None,
            background_url=summary.background_url or None,
            external_id=summary.external_id or None,
        )
