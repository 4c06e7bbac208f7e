"""VoirDrama site adapter: URL templates and markup extraction."""

from .parsers import (
    find_poster_near,
    parse_catalog,
    parse_episodes,
    parse_series,
    parse_status,
    parse_stream_candidates,
)
from .site import VoirdramaSite
from .text import decode_html
from .urls import DEFAULT_BASE_URL, DEFAULT_SITE, SiteUrls

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_SITE",
    "SiteUrls",
    "VoirdramaSite",
    "decode_html",
    "find_poster_near",
    "parse_catalog",
    "parse_episodes",
    "parse_series",
    "parse_status",
    "parse_stream_candidates",
]
