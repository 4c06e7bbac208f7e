"""Playable URL extraction from hoster embed pages (JWPlayer-style configs).

Used by the embed resolvers to unwrap an embed page into a media URL.
"""

from __future__ import annotations

import re

# Priority order: the first pattern that matches wins.
_PLAYABLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    # file:"https://.../master.m3u8"
    re.compile(r'file:\s*"([^"]+)"', re.IGNORECASE),
    # file:'https://.../master.m3u8'
    re.compile(r"file:\s*'([^']+)'", re.IGNORECASE),
    # "file":"https:\/\/...\/master.m3u8"
    re.compile(r'"file"\s*:\s*"([^"]+)"', re.IGNORECASE),
    # sources: [ {..., "file": "..."} ]
    re.compile(r'sources:\s*\[[\s\S]*?"file"\s*:\s*"([^"]+)"', re.IGNORECASE),
    # <source src="...">
    re.compile(r'source\s+src="([^"]+)"', re.IGNORECASE),
)


def normalize_media_url(url: str) -> str:
    """Undo JS/HTML escaping of an extracted URL.

    ``\\u0026`` -> ``&``, ``\\\\`` -> ``\\``, ``&amp;`` -> ``&``, ``\\/`` -> ``/``.
    """
    return (
        url.replace("\\u0026", "&")
        .replace("\\\\", "\\")
        .replace("&amp;", "&")
        .replace("\\/", "/")
        .strip()
    )


def extract_playable_url(html: str) -> str | None:
    """Return the first playable URL found in an embed page, or ``None``."""
    for pattern in _PLAYABLE_PATTERNS:
        m = pattern.search(html)
        if m and m.group(1):
            return normalize_media_url(m.group(1))
    return None
