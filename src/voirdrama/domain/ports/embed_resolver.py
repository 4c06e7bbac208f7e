"""Port for unwrapping hoster embed pages into playable URLs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbedResolverPort(Protocol):
    """Fetches an embed page and extracts the media URL from it.

    Implementations handle one hoster family (e.g. vidmoly.me / .to / .net).
    """

    @property
    def name(self) -> str:
        """Hoster name this resolver handles (e.g. 'vidmoly')."""
        ...

    @property
    def supported_domains(self) -> frozenset[str]:
        """Second-level domain names handled, e.g. ``{"vidmoly"}``."""
        ...

    def accepts(self, url: str) -> bool:
        """True when the URL's host belongs to this hoster family."""
        ...

    async def unwrap(self, url: str) -> str | None:
        """Return a playable URL, or None when the page yields none."""
        ...
