"""Vidmoly embed resolver: unwraps vidmoly embed pages into media URLs.

Vidmoly serves a JWPlayer page whose setup block carries the HLS master
playlist, e.g.::

    sources: [{file:"https://box-1234.vmwesa.online/hls/xyz/master.m3u8"}]

Domains (alive subset):
    vidmoly.me   (main)
    vidmoly.to   (alias)
    vidmoly.net  (alias)
    vidmoly.biz  (alias)
"""

from __future__ import annotations

from urllib.parse import urlparse

import structlog

from voirdrama.domain.exceptions import UpstreamUnavailable
from voirdrama.domain.ports.fetcher import FetcherPort
from voirdrama.infrastructure.resolvers._video_extract import extract_playable_url

log = structlog.get_logger(__name__)

_DOMAINS = frozenset({"vidmoly"})
_TLDS = frozenset({"biz", "me", "to", "net"})


def is_vidmoly_url(url: str) -> bool:
    """True for URLs hosted on the vidmoly domain family."""
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        return False
    parts = hostname.split(".")
    return len(parts) >= 2 and parts[-2] in _DOMAINS and parts[-1] in _TLDS


class VidmolyResolver:
    """Fetches a vidmoly embed page (through the cache) and extracts the URL."""

    def __init__(self, fetcher: FetcherPort) -> None:
        self._fetcher = fetcher

    @property
    def name(self) -> str:
        return "vidmoly"

    @property
    def supported_domains(self) -> frozenset[str]:
        return _DOMAINS

    def accepts(self, url: str) -> bool:
        return is_vidmoly_url(url)

    async def unwrap(self, url: str) -> str | None:
        try:
            html = await self._fetcher.fetch_text(url)
        except UpstreamUnavailable:
            log.warning("vidmoly_request_failed", url=url)
            return None

        video_url = extract_playable_url(html)
        if not video_url:
            log.info("vidmoly_no_video_url", url=url)
            return None

        log.debug("vidmoly_resolved", url=url, video_url=video_url)
        return video_url
