"""Stream use case: video ID -> ordered list of resolved streams."""

from __future__ import annotations

from typing import Protocol

import structlog

from voirdrama.domain.entities.ids import parse_video_id
from voirdrama.domain.entities.stream import DirectStream, ResolvedStream, StreamCandidate
from voirdrama.domain.exceptions import UpstreamUnavailable
from voirdrama.domain.ports.fetcher import FetcherPort
from voirdrama.domain.ports.site import ContentSitePort

log = structlog.get_logger(__name__)


class _ResolutionChain(Protocol):
    """Turns candidates into Direct/External results, order preserved."""

    async def resolve_all(
        self, candidates: list[StreamCandidate]
    ) -> list[ResolvedStream]: ...


class StreamUseCase:
    def __init__(
        self,
        fetcher: FetcherPort,
        site: ContentSitePort,
        chain: _ResolutionChain,
    ) -> None:
        self._fetcher = fetcher
        self._site = site
        self._chain = chain

    async def get(self, video_id: str) -> list[ResolvedStream]:
        """Malformed IDs and a failed episode fetch yield ``[]``."""
        parsed = parse_video_id(video_id)
        if parsed is None:
            log.debug("stream_invalid_video_id", video_id=video_id)
            return []
        series_slug, episode_slug = parsed

        url = self._site.episode_url(series_slug, episode_slug)
        try:
            html = await self._fetcher.fetch_text(url)
        except UpstreamUnavailable:
            log.warning("stream_fetch_failed", video_id=video_id, url=url, exc_info=True)
            return []

        candidates = self._site.parse_stream_candidates(html)
        if not candidates:
            log.info("stream_no_candidates", video_id=video_id)
            return []

        streams = await self._chain.resolve_all(candidates)
        log.info(
            "stream_resolved",
            video_id=video_id,
            candidates=len(candidates),
            direct=sum(1 for s in streams if isinstance(s, DirectStream)),
        )
        return streams
