"""Cached, time-bounded HTTP fetcher (httpx + CachePort)."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from voirdrama.domain.exceptions import UpstreamUnavailable
from voirdrama.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (Stremio Addon; +https://stremio.com)"
DEFAULT_TIMEOUT = 15.0

_HTML_ACCEPT = "text/html,application/xhtml+xml"
_JSON_ACCEPT = "application/json"


class HttpxFetcher:
    """Fetch text/JSON through the tiered cache.

    Implements ``FetcherPort`` from domain.ports.fetcher.

    - Cache key is the URL alone (no header variation).
    - A cache hit never touches the network.
    - On a miss: a single GET bounded by ``timeout`` seconds overall.
      Timeouts, transport errors and non-2xx statuses raise
      ``UpstreamUnavailable`` and nothing is cached.
    - Successful payloads are written through both cache tiers first.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        cache: CachePort,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        ttl_seconds: int | None = None,
    ) -> None:
        self._http = http_client
        self._cache = cache
        self._timeout = timeout
        self._user_agent = user_agent
        self._ttl = ttl_seconds

    async def fetch_text(self, url: str) -> str:
        cached = await self._cache.get(url)
        if isinstance(cached, str):
            return cached

        resp = await self._get(url, accept=_HTML_ACCEPT)
        text = resp.text
        await self._cache.set(url, text, ttl=self._ttl)
        return text

    async def fetch_json(self, url: str) -> Any:
        cached = await self._cache.get(url)
        if cached is not None:
            return cached

        resp = await self._get(url, accept=_JSON_ACCEPT)
        try:
            data = resp.json()
        except ValueError as exc:
            log.warning("fetch_invalid_json", url=url)
            raise UpstreamUnavailable(url, "invalid JSON") from exc
        await self._cache.set(url, data, ttl=self._ttl)
        return data

    async def _get(self, url: str, *, accept: str) -> httpx.Response:
        headers = {"User-Agent": self._user_agent, "Accept": accept}
        try:
            resp = await asyncio.wait_for(
                self._http.get(url, headers=headers, timeout=self._timeout),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            log.warning("fetch_timeout", url=url, timeout=self._timeout)
            raise UpstreamUnavailable(url, "timeout") from exc
        except httpx.HTTPError as exc:
            log.warning("fetch_network_error", url=url, error=str(exc))
            raise UpstreamUnavailable(url, "network error") from exc

        if not resp.is_success:
            log.warning("fetch_http_error", url=url, status=resp.status_code)
            raise UpstreamUnavailable(url, f"HTTP {resp.status_code}")

        log.debug("fetch_ok", url=url, status=resp.status_code, size=len(resp.content))
        return resp
