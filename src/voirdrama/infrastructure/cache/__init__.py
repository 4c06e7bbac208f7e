"""Cache Infrastructure - tier implementations and the tiered composition."""

from .cache_factory import CacheBackend, create_cache
from .diskcache_adapter import DiskcacheAdapter
from .file_adapter import FileCacheAdapter, cache_digest
from .memory_adapter import MemoryCacheAdapter
from .tiered import TieredCache

__all__ = [
    "CacheBackend",
    "DiskcacheAdapter",
    "FileCacheAdapter",
    "MemoryCacheAdapter",
    "TieredCache",
    "cache_digest",
    "create_cache",
]
