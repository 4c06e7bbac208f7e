"""In-process cache tier (tier 1)."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, Optional

import structlog

log = structlog.get_logger(__name__)


class _CacheEntry:
    """Time-bounded cache entry."""

    __slots__ = ("value", "expires_at")

    def __init__(self, value: Any, expires_at: float) -> None:
        self.value = value
        self.expires_at = expires_at


class MemoryCacheAdapter:
    """Dict-backed cache with per-entry expiry.

    Unbounded: entries only leave on expiry (checked lazily on read).
    Safe for concurrent coroutines on one event loop; last writer wins.

    Args:
        ttl_seconds: Default TTL for `set()` without explicit value.
        clock: Wall-clock source in seconds (injectable for tests).
    """

    def __init__(
        self,
        ttl_seconds: int = 900,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.default_ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    async def __aenter__(self) -> MemoryCacheAdapter:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._entries.pop(key, None)
            log.debug("memory_cache_expired", key=key)
            return None
        return entry.value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        expire_time = ttl if ttl is not None else self.default_ttl
        self._entries[key] = _CacheEntry(value, self._clock() + expire_time)

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def clear(self) -> None:
        self._entries.clear()
        log.info("memory_cache_cleared")
