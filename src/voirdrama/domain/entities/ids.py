"""Composite Stremio IDs.

Series:  ``voirdrama:<series-slug>``
Episode: ``voirdrama:<series-slug>:<episode-slug>``

IDs are not opaque: both forms always split back into the slugs they
were built from.  Slugs therefore must not contain ``:``.
"""

from __future__ import annotations

import re

ID_PREFIX = "voirdrama"

_SERIES_ID_RE = re.compile(rf"^{ID_PREFIX}:([^:]+)$")
_VIDEO_ID_RE = re.compile(rf"^{ID_PREFIX}:([^:]+):([^:]+)$")
_EXTERNAL_ID_RE = re.compile(r"^tt\d+$")


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and ":" not in slug


def series_id(slug: str) -> str:
    if not is_valid_slug(slug):
        raise ValueError(f"Invalid series slug: {slug!r}")
    return f"{ID_PREFIX}:{slug}"


def video_id(series_slug: str, episode_slug: str) -> str:
    if not is_valid_slug(series_slug) or not is_valid_slug(episode_slug):
        raise ValueError(f"Invalid slugs: {series_slug!r}, {episode_slug!r}")
    return f"{ID_PREFIX}:{series_slug}:{episode_slug}"


def parse_series_id(raw_id: str) -> str | None:
    """Return the series slug, or None for anything but a series ID."""
    m = _SERIES_ID_RE.match(raw_id or "")
    return m.group(1) if m else None


def parse_video_id(raw_id: str) -> tuple[str, str] | None:
    """Return ``(series_slug, episode_slug)``, or None when malformed."""
    m = _VIDEO_ID_RE.match(raw_id or "")
    if not m:
        return None
    return m.group(1), m.group(2)


def is_external_id(raw_id: str) -> bool:
    """True for IMDb-style IDs (``tt1234567``)."""
    return bool(_EXTERNAL_ID_RE.match(raw_id or ""))
