"""Adapters normalizing what each backend family reports.

Every adapter implements the BackendAdapter contract:
- list_items(search): lazy sequence of CacheItemRecord
- summary(search): CacheSummary, with unknown counters left as None
- get_name(), is_available(), is_persistent(), is_driver_aggregator()

AdapterResolver picks the adapter for a backend, falling back to
GenericAdapter for backends it does not know.
"""

from cacheinfo.adapters.base import BackendAdapter, SearchQuery
from cacheinfo.adapters.composite import CompositeAdapter
from cacheinfo.adapters.distributed_kv import DistributedKVAdapter
from cacheinfo.adapters.generic import GenericAdapter
from cacheinfo.adapters.local_memory import LocalMemoryAdapter
from cacheinfo.adapters.network_kv import NetworkKVAdapter
from cacheinfo.adapters.resolver import AdapterResolver

__all__ = [
    # Contract
    "BackendAdapter",
    "SearchQuery",
    # Backend families
    "CompositeAdapter",
    "DistributedKVAdapter",
    "GenericAdapter",
    "LocalMemoryAdapter",
    "NetworkKVAdapter",
    # Resolution
    "AdapterResolver",
]
