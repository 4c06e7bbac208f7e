"""SQLite-backed durable tier built on the ``diskcache`` library."""

from __future__ import annotations

import asyncio
import pickle
import sqlite3
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import structlog
from diskcache import Cache as DiskCache

from voirdrama.infrastructure.cache.file_adapter import cache_digest

log = structlog.get_logger(__name__)

T = TypeVar("T")

# Raised by diskcache when a stored value cannot be unpickled.
_CORRUPT_ENTRY_ERRORS = (pickle.UnpicklingError, EOFError, AttributeError, ValueError)


class DiskcacheAdapter:
    """Durable tier alternative to ``FileCacheAdapter``.

    diskcache is synchronous, so every call runs in a worker thread behind a
    semaphore that bounds SQLite lock contention. Keys go through the same
    versioned digest as the file tier. Read and write errors degrade to
    misses; they never reach the fetcher.
    """

    def __init__(
        self,
        directory: str | Path,
        ttl_seconds: int = 900,
        *,
        version: str = "v2",
        max_concurrent: int = 10,
    ) -> None:
        self.directory = Path(directory)
        self.default_ttl = ttl_seconds
        self.version = version
        self._db: DiskCache | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def __aenter__(self) -> DiskcacheAdapter:
        if self._db is None:
            self._db = await asyncio.to_thread(DiskCache, str(self.directory))
            log.info(
                "diskcache_opened",
                directory=str(self.directory),
                default_ttl=self.default_ttl,
                version=self.version,
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        db, self._db = self._db, None
        if db is not None:
            await asyncio.to_thread(db.close)
            log.info("diskcache_closed", directory=str(self.directory))

    async def _run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        async with self._semaphore:
            return await asyncio.to_thread(fn, *args, **kwargs)

    def _opened(self) -> DiskCache:
        if self._db is None:
            raise RuntimeError("DiskcacheAdapter used outside 'async with'")
        return self._db

    async def get(self, key: str) -> Optional[Any]:
        db = self._opened()
        try:
            value = await self._run(db.get, cache_digest(key, self.version), default=None)
        except (OSError, sqlite3.Error):
            log.debug("diskcache_read_failed", key=key, exc_info=True)
            return None
        except _CORRUPT_ENTRY_ERRORS:
            log.debug("diskcache_entry_corrupt", key=key, exc_info=True)
            return None
        log.debug("cache_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        db = self._opened()
        expire = self.default_ttl if ttl is None else ttl
        try:
            await self._run(db.set, cache_digest(key, self.version), value, expire=expire)
        except (OSError, sqlite3.Error):
            log.warning("diskcache_write_failed", key=key, exc_info=True)
            return
        log.debug("cache_set", key=key, ttl=expire)

    async def delete(self, key: str) -> bool:
        if self._db is None:
            return False
        return bool(await self._run(self._db.delete, cache_digest(key, self.version)))

    async def clear(self) -> None:
        if self._db is None:
            return
        removed = await self._run(self._db.clear)
        log.warning("cache_cleared", directory=str(self.directory), removed=removed)
