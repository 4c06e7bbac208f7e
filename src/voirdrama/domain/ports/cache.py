"""Cache Port - Interface for the tiered fetch cache and its tiers."""

from __future__ import annotations

from typing import Any, Protocol


class CachePort(Protocol):
    """Port for async key-value cache with TTL support.

    Implementations:
      - MemoryCacheAdapter (tier 1, in-process dict)
      - FileCacheAdapter (tier 2, one JSON file per key)
      - DiskcacheAdapter (tier 2 alternative, SQLite-based)
      - TieredCache (tier 1 in front of a tier 2)

    An expired entry is absent, not an error. Values must be
    JSON-serializable (str, dict, list, ...).
    """

    async def get(self, key: str) -> Any:
        """Retrieve value. None = not found / expired."""
        ...

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        """Set value with optional TTL (seconds)."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete key. True = deleted, False = did not exist."""
        ...

    async def clear(self) -> None:
        """Delete ALL keys."""
        ...

    async def aclose(self) -> None:
        """Cleanup hook."""
        ...

    async def __aenter__(self) -> CachePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
