"""Cache factory - builds the tiered cache based on config."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog

from voirdrama.domain.ports.cache import CachePort
from voirdrama.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from voirdrama.infrastructure.cache.file_adapter import FileCacheAdapter
from voirdrama.infrastructure.cache.memory_adapter import MemoryCacheAdapter
from voirdrama.infrastructure.cache.tiered import TieredCache

log = structlog.get_logger(__name__)

CacheBackend = Literal["files", "diskcache"]


def create_cache(
    backend: CacheBackend = "files",
    *,
    directory: str | Path = "/tmp/voirdrama-stremio-cache",
    ttl_seconds: int = 900,
    version: str = "v2",
    max_concurrent: int = 10,
) -> TieredCache:
    """Create a memory tier in front of the selected durable tier.

    Args:
        backend: "files" (one JSON file per key) or "diskcache" (SQLite).
        directory: Durable tier location.
        ttl_seconds: Default TTL for both tiers.
        version: Cache version baked into durable keys.
        max_concurrent: Semaphore limit for durable disk ops.

    Raises:
        ValueError: If `backend` is unknown.
    """
    durable: CachePort
    if backend == "files":
        durable = FileCacheAdapter(
            directory,
            ttl_seconds,
            version=version,
            max_concurrent=max_concurrent,
        )
    elif backend == "diskcache":
        durable = DiskcacheAdapter(
            directory,
            ttl_seconds,
            version=version,
            max_concurrent=max_concurrent,
        )
    else:
        raise ValueError(
            f"Unknown cache backend: {backend!r}. Must be 'files' or 'diskcache'."
        )

    log.info(
        "cache_factory_create",
        backend=backend,
        directory=str(directory),
        ttl=ttl_seconds,
        version=version,
    )
    return TieredCache(
        memory=MemoryCacheAdapter(ttl_seconds),
        durable=durable,
        ttl_seconds=ttl_seconds,
    )
