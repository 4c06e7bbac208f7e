"""Domain entities for the VoirDrama catalog.

Pure value objects: no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CatalogEntry:
    """A series as it appears on a listing or search page.

    ``slug`` is an internal correlation field; the addon layer never
    serializes it.
    """

    id: str  # "voirdrama:<slug>"
    slug: str
    name: str
    poster_url: str | None = None
    background_url: str | None = None
    external_id: str | None = None  # IMDb ID, e.g. "tt1234567"


@dataclass(frozen=True)
class EpisodeRef:
    """One entry of a series episode list."""

    id: str  # "voirdrama:<series-slug>:<episode-slug>"
    title: str
    season: int = 1
    episode: int | None = None
    released: str | None = None  # Display label, e.g. "12 janvier 2024"


@dataclass(frozen=True)
class SeriesDetail:
    """Series detail page, optionally overlaid with external metadata."""

    id: str
    name: str
    poster_url: str | None = None
    background_url: str | None = None
    description: str | None = None
    genres: tuple[str, ...] = ()
    episodes: tuple[EpisodeRef, ...] = field(default_factory=tuple)
    status: str | None = None
    external_id: str | None = None
