"""Port for cached, time-bounded network retrieval."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FetcherPort(Protocol):
    """Fetch a URL through the cache.

    The cache key is the URL alone, so every request-distinguishing bit
    (query, page number) has to be part of it.

    Raises:
        UpstreamUnavailable: on timeout, transport error or non-2xx status.
    """

    async def fetch_text(self, url: str) -> str:
        """Fetch an HTML/text document."""
        ...

    async def fetch_json(self, url: str) -> Any:
        """Fetch and decode a JSON document."""
        ...
