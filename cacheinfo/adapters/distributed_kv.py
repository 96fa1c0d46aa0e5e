"""Adapter for distributed key-value stores exposing INFO (Redis)."""

import logging
import re
from collections.abc import Mapping
from typing import Any

from cacheinfo.adapters.base import BackendAdapter, SearchQuery, coerce_counter
from cacheinfo.backends.base import InfoClient
from cacheinfo.errors import BackendQueryError, BackendUnavailable
from cacheinfo.models.model_cache import CacheSummary

logger = logging.getLogger(__name__)

_KEYSPACE_SECTION = re.compile(r"^db\d+$")


def count_keyspace_keys(info: Mapping[str, Any]) -> int | None:
    """Sum the 'keys' counters of every dbN keyspace entry.

    Returns None when INFO reported no keyspace entries at all.
    """
    counts = [
        coerce_counter(section.get("keys"))
        for name, section in info.items()
        if _KEYSPACE_SECTION.match(str(name)) and isinstance(section, Mapping)
    ]
    known = [count for count in counts if count is not None]
    if not known:
        return None
    return sum(known)


class DistributedKVAdapter(BackendAdapter):
    """Summarizes a Redis-style backend from a single INFO call.

    Keys are not enumerated, so list_items() is always empty.
    """

    def get_client(self) -> InfoClient:
        if not isinstance(self.backend, InfoClient):
            raise BackendUnavailable(
                f"Backend {type(self.backend).__name__} does not expose an info query"
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
            info = self.get_client().info()
        except BackendQueryError as e:
            logger.warning(f"No stats from {self.get_name()}: {e}")
            return summary

        if not info:
            logger.debug(f"Empty INFO response from {self.get_name()}")
            return summary

        return summary.model_copy(
            update={
                "total_count": count_keyspace_keys(info),
                "total_hits": coerce_counter(info.get("keyspace_hits")),
                "total_misses": coerce_counter(info.get("keyspace_misses")),
                "total_size": coerce_counter(info.get("used_memory_dataset")),
            }
        )
