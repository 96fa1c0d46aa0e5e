"""Adapter for network key-value stores reporting aggregate stats (memcached)."""

import logging

from cacheinfo.adapters.base import BackendAdapter, SearchQuery, coerce_counter
from cacheinfo.backends.base import StatsClient
from cacheinfo.errors import BackendQueryError, BackendUnavailable
from cacheinfo.models.model_cache import CacheSummary

logger = logging.getLogger(__name__)

# CacheSummary field -> memcached stats counter
STATS_COUNTERS = {
    "total_count": "curr_items",
    "total_hits": "get_hits",
    "total_misses": "get_misses",
    "total_size": "bytes",
}


class NetworkKVAdapter(BackendAdapter):
    """Summarizes a memcached-style backend from its 'stats' counters.

    Keys cannot be enumerated, so list_items() is always empty.
    """

    def get_client(self) -> StatsClient:
        if not isinstance(self.backend, StatsClient):
            raise BackendUnavailable(
                f"Backend {type(self.backend).__name__} does not expose a stats query"
            )
        return self.backend

    def get_name(self) -> str:
        """Name of the client library serving the backend."""
        return self.get_client().client_name

    def is_driver_supported(self) -> bool:
        return True

    def summary(self, search: SearchQuery = None) -> CacheSummary:
        summary = self.base_summary()

        try:
            stats = self.get_client().stats()
        except BackendQueryError as e:
            logger.warning(f"No stats from {self.get_name()}: {e}")
            return summary

        if not stats:
            logger.debug(f"Empty stats response from {self.get_name()}")
            return summary

        return summary.model_copy(
            update={
                field: coerce_counter(stats.get(counter))
                for field, counter in STATS_COUNTERS.items()
            }
        )
