"""Stream resolution chain: candidate -> DirectStream | ExternalStream."""

from __future__ import annotations

import asyncio

import structlog

from voirdrama.domain.entities.stream import (
    DirectStream,
    ExternalStream,
    ResolvedStream,
    StreamCandidate,
)
from voirdrama.domain.ports.embed_resolver import EmbedResolverPort

log = structlog.get_logger(__name__)


class StreamResolutionChain:
    """Dispatches candidates to the resolver of their hoster family.

    - A candidate whose embed host has a resolver is "unwrappable": the
      embed page is fetched once and scanned for a playable URL.
    - Everything else, and every failed unwrap, degrades to an
      ``ExternalStream`` carrying the original embed URL.
    - No retries: one attempt per candidate per request.
    """

    def __init__(
        self,
        resolvers: list[EmbedResolverPort] | None = None,
        *,
        max_concurrent: int = 5,
    ) -> None:
        self._resolvers: list[EmbedResolverPort] = list(resolvers or [])
        self._max_concurrent = max(1, max_concurrent)
        for resolver in self._resolvers:
            log.debug("embed_resolver_registered", hoster=resolver.name)

    @property
    def supported_hosters(self) -> list[str]:
        return [resolver.name for resolver in self._resolvers]

    def resolver_for(self, url: str) -> EmbedResolverPort | None:
        for resolver in self._resolvers:
            if resolver.accepts(url):
                return resolver
        return None

    def is_unwrappable(self, url: str) -> bool:
        return self.resolver_for(url) is not None

    async def resolve(self, candidate: StreamCandidate) -> ResolvedStream:
        resolver = self.resolver_for(candidate.embed_url)
        if resolver is not None:
            playable = await resolver.unwrap(candidate.embed_url)
            if playable:
                return DirectStream(label=candidate.label, playable_url=playable)
            log.info(
                "stream_unwrap_degraded",
                hoster=resolver.name,
                embed_url=candidate.embed_url,
            )
        return ExternalStream(label=candidate.label, embed_url=candidate.embed_url)

    async def resolve_all(self, candidates: list[StreamCandidate]) -> list[ResolvedStream]:
        """Resolve candidates concurrently; output order = candidate order."""
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def _bounded(candidate: StreamCandidate) -> ResolvedStream:
            async with semaphore:
                return await self.resolve(candidate)

        # gather() returns results in argument order, not completion order.
        return list(await asyncio.gather(*(_bounded(c) for c in candidates)))
