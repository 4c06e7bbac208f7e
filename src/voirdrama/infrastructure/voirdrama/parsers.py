"""Regex extraction of VoirDrama listing, series and episode pages.

Pure functions: no I/O, no cache.  Upstream markup is unversioned, so
every matcher is independent and best-effort - a pattern that no longer
matches yields ``None`` / an empty list for its field only and never
aborts extraction of the others.
"""

from __future__ import annotations

import json
import re

import structlog

from voirdrama.domain.entities.catalog import CatalogEntry, EpisodeRef, SeriesDetail
from voirdrama.domain.entities.ids import series_id, video_id
from voirdrama.domain.entities.stream import StreamCandidate
from voirdrama.infrastructure.voirdrama.text import decode_html, extract_between, strip_tags
from voirdrama.infrastructure.voirdrama.urls import DEFAULT_SITE, SiteUrls

log = structlog.get_logger(__name__)

# Characters searched on each side of a series link for its poster.
POSTER_WINDOW = 800

FALLBACK_PLAYER_LABEL = "Player"

_IMG_DATA_SRC_RE = re.compile(r'<img[^>]+data-src="([^"]+)"', re.IGNORECASE)
_IMG_SRC_RE = re.compile(r'<img[^>]+src="([^"]+)"', re.IGNORECASE)
_IMG_SRCSET_RE = re.compile(r'<img[^>]+srcset="([^"]+)"', re.IGNORECASE)

_TITLE_RE = re.compile(r"<h1>\s*([^<]+)\s*</h1>", re.IGNORECASE)
_SUMMARY_IMG_RE = re.compile(r'<div class="summary_image"[\s\S]*?<img([^>]+)>', re.IGNORECASE)
_DATA_SRC_ATTR_RE = re.compile(r'data-src="([^"]+)"', re.IGNORECASE)
_SRC_ATTR_RE = re.compile(r'(?<![-\w])src="([^"]+)"', re.IGNORECASE)
_DESC_START_RE = re.compile(r'<div class="summary__content\s*">', re.IGNORECASE)
_DESC_END_RE = re.compile(r"</div>", re.IGNORECASE)
_GENRE_RE = re.compile(r'rel="tag">([^<]+)</a>')
_STATUS_RE = re.compile(
    r'<h5>\s*Status\s*</h5>[\s\S]*?<div class="summary-content">\s*([^<]+)\s*<',
    re.IGNORECASE,
)

_EPISODE_ITEM_RE = re.compile(r'<li class="wp-manga-chapter[\s\S]*?</li>')
_RELEASED_RE = re.compile(r'<span class="post-on[^>]*>\s*([^<]+)\s*</span>', re.IGNORECASE)
_DIGITS_RE = re.compile(r"(\d+)")

_SOURCES_RE = re.compile(r"var thisChapterSources = (\{[\s\S]*?\});")
_FRAGMENT_SRC_RE = re.compile(r"""src=["']([^"']+)["']""", re.IGNORECASE)
_IFRAME_SRC_RE = re.compile(r'<iframe[^>]+src="([^"]+)"', re.IGNORECASE)


# ---------------------------------------------------------------------------
# Catalog (listing / search pages)
# ---------------------------------------------------------------------------


def find_poster_near(html: str, url: str) -> str | None:
    """Find an image within +/-POSTER_WINDOW chars of the first ``url`` occurrence.

    Preference: lazy-load ``data-src`` > ``src`` > first ``srcset`` entry.
    """
    idx = html.find(url)
    if idx == -1:
        return None
    snippet = html[max(0, idx - POSTER_WINDOW) : idx + POSTER_WINDOW]

    m = _IMG_DATA_SRC_RE.search(snippet)
    if m:
        return m.group(1)
    m = _IMG_SRC_RE.search(snippet)
    if m:
        return m.group(1)
    m = _IMG_SRCSET_RE.search(snippet)
    if m:
        first = m.group(1).split(",")[0].strip()
        return first.split()[0] if first else None
    return None


def parse_catalog(html: str, site: SiteUrls = DEFAULT_SITE) -> list[CatalogEntry]:
    """Extract series entries, deduplicated by slug (first occurrence wins)."""
    entries: list[CatalogEntry] = []
    seen: set[str] = set()

    for m in site.series_anchor_re.finditer(html):
        url = m.group(1)
        slug = site.series_slug(url)
        if not slug or slug in seen:
            continue
        seen.add(slug)
        entries.append(
            CatalogEntry(
                id=series_id(slug),
                slug=slug,
                name=decode_html(m.group(2)),
                poster_url=find_poster_near(html, url),
            )
        )

    if not entries:
        log.debug("catalog_extraction_empty", size=len(html))
    return entries


# ---------------------------------------------------------------------------
# Series detail page
# ---------------------------------------------------------------------------


def _parse_title(html: str) -> str | None:
    m = _TITLE_RE.search(html)
    if not m:
        return None
    return decode_html(m.group(1)) or None


def _parse_poster(html: str) -> str | None:
    m = _SUMMARY_IMG_RE.search(html)
    if not m:
        return None
    attrs = m.group(1)
    for attr_re in (_DATA_SRC_ATTR_RE, _SRC_ATTR_RE):
        a = attr_re.search(attrs)
        if a:
            return a.group(1)
    return None


def _parse_description(html: str) -> str | None:
    block = extract_between(html, _DESC_START_RE, _DESC_END_RE)
    if block is None:
        return None
    return decode_html(strip_tags(block)) or None


def _parse_genres(html: str) -> tuple[str, ...]:
    genres: list[str] = []
    for m in _GENRE_RE.finditer(html):
        name = decode_html(m.group(1))
        if name and name not in genres:
            genres.append(name)
    return tuple(genres)


def parse_status(html: str) -> str | None:
    """Return the series status label (e.g. "En cours"), or None."""
    m = _STATUS_RE.search(html)
    if not m:
        return None
    return decode_html(m.group(1)) or None


def parse_episodes(
    html: str, series_slug: str, site: SiteUrls = DEFAULT_SITE
) -> list[EpisodeRef]:
    """Extract the episode list in markup order."""
    episodes: list[EpisodeRef] = []
    for item in _EPISODE_ITEM_RE.finditer(html):
        block = item.group(0)
        link = site.episode_anchor_re.search(block)
        if not link:
            continue
        episode_slug = site.episode_slug(link.group(1))
        if not episode_slug:
            continue

        label = decode_html(link.group(2))
        released_match = _RELEASED_RE.search(block)
        released = decode_html(released_match.group(1)) if released_match else None

        number_match = _DIGITS_RE.search(label)
        number = int(number_match.group(1)) if number_match else None

        episodes.append(
            EpisodeRef(
                id=video_id(series_slug, episode_slug),
                title=f"Episode {number if number is not None else label}",
                season=1,
                episode=number,
                released=released or None,
            )
        )
    return episodes


def parse_series(
    html: str, series_slug: str, site: SiteUrls = DEFAULT_SITE
) -> SeriesDetail:
    """Extract a series detail page. Missing fields stay ``None``/empty."""
    poster = _parse_poster(html)
    return SeriesDetail(
        id=series_id(series_slug),
        name=_parse_title(html) or series_slug,
        poster_url=poster,
        background_url=poster,
        description=_parse_description(html),
        genres=_parse_genres(html),
        episodes=tuple(parse_episodes(html, series_slug, site)),
        status=parse_status(html),
    )


# ---------------------------------------------------------------------------
# Episode page
# ---------------------------------------------------------------------------


def _parse_sources_map(html: str) -> list[StreamCandidate]:
    m = _SOURCES_RE.search(html)
    if not m:
        return []
    try:
        sources = json.loads(m.group(1))
    except ValueError:
        log.debug("stream_sources_malformed_json")
        return []
    if not isinstance(sources, dict):
        return []

    candidates: list[StreamCandidate] = []
    for name, fragment in sources.items():
        if not isinstance(fragment, str):
            continue
        src = _FRAGMENT_SRC_RE.search(fragment)
        if src:
            candidates.append(
                StreamCandidate(label=decode_html(str(name)), embed_url=src.group(1))
            )
    return candidates


def parse_stream_candidates(html: str) -> list[StreamCandidate]:
    """Extract player candidates from an episode page.

    1. ``var thisChapterSources = {"<player>": "<iframe src=...>", ...};``
    2. Fallback: the first bare ``<iframe src>`` as a single "Player".
    """
    candidates = _parse_sources_map(html)
    if candidates:
        return candidates

    m = _IFRAME_SRC_RE.search(html)
    if m:
        return [StreamCandidate(label=FALLBACK_PLAYER_LABEL, embed_url=m.group(1))]
    return []
