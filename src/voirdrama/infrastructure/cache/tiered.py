"""Two-tier cache: in-process tier in front of a durable tier."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from voirdrama.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)


class TieredCache:
    """Read-through / write-through composition of two CachePorts.

    - ``get`` checks tier 1 first, then tier 2.  A tier-2 hit is promoted
      into tier 1 with a fresh TTL window before it is returned.
    - ``set`` writes through both tiers.

    Args:
        memory: Fast tier (``MemoryCacheAdapter``).
        durable: Persistent tier (``FileCacheAdapter`` / ``DiskcacheAdapter``).
        ttl_seconds: Default TTL for both tiers.
    """

    def __init__(
        self,
        memory: CachePort,
        durable: CachePort,
        ttl_seconds: int = 900,
    ) -> None:
        self.memory = memory
        self.durable = durable
        self.default_ttl = ttl_seconds

    async def __aenter__(self) -> TieredCache:
        await self.memory.__aenter__()
        await self.durable.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.memory.aclose()
        await self.durable.aclose()

    async def get(self, key: str) -> Optional[Any]:
        value = await self.memory.get(key)
        if value is not None:
            log.debug("cache_hit", tier=1, key=key)
            return value

        value = await self.durable.get(key)
        if value is None:
            log.debug("cache_miss", key=key)
            return None

        await self.memory.set(key, value, ttl=self.default_ttl)
        log.debug("cache_hit", tier=2, key=key)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        expire_time = ttl if ttl is not None else self.default_ttl
        await self.memory.set(key, value, ttl=expire_time)
        await self.durable.set(key, value, ttl=expire_time)

    async def delete(self, key: str) -> bool:
        in_memory = await self.memory.delete(key)
        on_disk = await self.durable.delete(key)
        return in_memory or on_disk

    async def clear(self) -> None:
        await self.memory.clear()
        await self.durable.clear()
