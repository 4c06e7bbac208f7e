"""Content-addressed file cache (tier 2) - one JSON file per key."""

from __future__ import annotations

import asyncio
import hashlib
import json
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

import structlog

log = structlog.get_logger(__name__)


def cache_digest(key: str, version: str) -> str:
    """Stable, filesystem-safe digest of ``version:key``.

    Bumping ``version`` makes every older entry unreachable without
    touching the files themselves.
    """
    return hashlib.sha1(f"{version}:{key}".encode("utf-8")).hexdigest()


class FileCacheAdapter:
    """Async file store: ``<directory>/<sha1(version:key)>.json``.

    Each file holds ``{"value": ..., "expiresAt": <epoch ms>}``.

    - Missing, malformed or expired files are cache misses, never errors.
    - Write failures are logged and swallowed; the cache is an
      optimization, not a source of truth.
    - Disk I/O runs via `asyncio.to_thread`, bounded by a semaphore.
    - The directory is created on the first write.

    Args:
        directory: Cache directory.
        ttl_seconds: Default TTL for `set()` without explicit value.
        version: Cache version baked into every digest.
        max_concurrent: Max parallel disk ops.
        clock: Wall-clock source in seconds (injectable for tests).
    """

    def __init__(
        self,
        directory: str | Path,
        ttl_seconds: int = 900,
        *,
        version: str = "v2",
        max_concurrent: int = 10,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.directory = Path(directory)
        self.default_ttl = ttl_seconds
        self.version = version
        self._clock = clock
        self._semaphore = asyncio.Semaphore(max_concurrent)

        log.info(
            "file_cache_init",
            directory=str(self.directory),
            default_ttl=ttl_seconds,
            version=version,
        )

    # --- Context Manager ---
    async def __aenter__(self) -> FileCacheAdapter:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Nothing to release; files stay on disk."""

    def path_for(self, key: str) -> Path:
        return self.directory / f"{cache_digest(key, self.version)}.json"

    # --- CachePort implementation ---
    async def get(self, key: str) -> Optional[Any]:
        async with self._semaphore:
            value = await asyncio.to_thread(self._read, key)
        log.debug("file_cache_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        expire_time = ttl if ttl is not None else self.default_ttl
        expires_at_ms = int((self._clock() + expire_time) * 1000)
        try:
            async with self._semaphore:
                await asyncio.to_thread(self._write, key, value, expires_at_ms)
        except (OSError, TypeError, ValueError):
            log.warning("file_cache_write_failed", key=key, exc_info=True)
            return
        log.debug("file_cache_set", key=key, ttl=expire_time)

    async def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            async with self._semaphore:
                await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError:
            log.warning("file_cache_delete_failed", key=key, exc_info=True)
            return False
        return True

    async def clear(self) -> None:
        """Delete all cache files of every version."""
        async with self._semaphore:
            removed = await asyncio.to_thread(self._remove_all)
        log.warning("file_cache_cleared", directory=str(self.directory), removed=removed)

    # --- Sync helpers (run in worker threads) ---
    def _read(self, key: str) -> Optional[Any]:
        path = self.path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError:
            log.debug("file_cache_read_failed", key=key, exc_info=True)
            return None

        try:
            payload = json.loads(raw)
        except ValueError:
            log.debug("file_cache_corrupt", key=key, path=str(path))
            return None

        if not isinstance(payload, dict):
            return None
        expires_at = payload.get("expiresAt")
        if not isinstance(expires_at, (int, float)):
            return None
        if self._clock() * 1000 >= expires_at:
            return None
        return payload.get("value")

    def _write(self, key: str, value: Any, expires_at_ms: int) -> None:
        data = json.dumps({"value": value, "expiresAt": expires_at_ms})
        self.directory.mkdir(parents=True, exist_ok=True)
        # Readers only ever see complete files.
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
            os.replace(tmp_name, self.path_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _remove_all(self) -> int:
        if not self.directory.is_dir():
            return 0
        removed = 0
        for path in self.directory.glob("*.json"):
            try:
                path.unlink()
                removed += 1
            except OSError:
                log.debug("file_cache_unlink_failed", path=str(path))
        return removed
