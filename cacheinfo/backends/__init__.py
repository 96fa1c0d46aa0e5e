"""Cache backends and the accessor interfaces used to inspect them.

This module provides:
- CacheBackend: Abstract base class for backends
- MemoryBackend: Shared, enumerable in-process store
- EphemeralBackend: Transient per-instance dict
- MemcacheBackend / RedisBackend: Network stores exposing aggregate stats
- CompositeBackend: Ordered chain of child backends
- DriverRegistry: Driver name <-> backend class table
"""

from cacheinfo.backends.base import (
    CacheBackend,
    EnumerableBackend,
    EnumerableStore,
    InfoClient,
    PoolHandle,
    StatsClient,
    StoreIterator,
)
from cacheinfo.backends.composite import CompositeBackend
from cacheinfo.backends.ephemeral import EphemeralBackend
from cacheinfo.backends.memcache import MemcacheBackend
from cacheinfo.backends.memory import MemoryBackend, MemoryStore, shared_store
from cacheinfo.backends.redis_backend import RedisBackend
from cacheinfo.backends.registry import DriverRegistry

__all__ = [
    "CacheBackend",
    "CompositeBackend",
    "DriverRegistry",
    "EnumerableBackend",
    "EnumerableStore",
    "EphemeralBackend",
    "InfoClient",
    "MemcacheBackend",
    "MemoryBackend",
    "MemoryStore",
    "PoolHandle",
    "RedisBackend",
    "StatsClient",
    "StoreIterator",
    "shared_store",
]
