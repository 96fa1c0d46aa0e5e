"""Memcached backend wrapping a pymemcache client."""

import logging
from collections.abc import Mapping
from typing import Any

from pymemcache.exceptions import MemcacheError

from cacheinfo.backends.base import CacheBackend
from cacheinfo.errors import BackendQueryError

logger = logging.getLogger(__name__)


def _decode(value: Any) -> Any:
    if isinstance(value, bytes):
        text = value.decode("utf-8", errors="replace")
        try:
            return int(text)
        except ValueError:
            return text
    return value


def normalize_stats(raw: Mapping[Any, Any] | None) -> dict[str, Any]:
    """Flatten a stats response into {counter name: value}.

    Responses keyed by server (one mapping per server) report the first
    server only. Byte keys and values are decoded.
    """
    if not raw:
        return {}

    values = list(raw.values())
    if values and all(isinstance(value, Mapping) for value in values):
        raw = values[0]

    return {_decode(key): _decode(value) for key, value in raw.items()}


class MemcacheBackend(CacheBackend):
    """Backend storing entries in memcached.

    Memcached cannot enumerate its keys; only aggregate counters are exposed.
    """

    def __init__(self, client: Any):
        """Initialize MemcacheBackend.

        Args:
            client: pymemcache Client, HashClient or PooledClient.
        """
        self.client = client

    @property
    def client_name(self) -> str:
        """Qualified name of the client class, e.g. 'pymemcache.Client'."""
        client_type = type(self.client)
        return f"{client_type.__module__.split('.')[0]}.{client_type.__name__}"

    def stats(self) -> dict[str, Any]:
        """Run the memcached 'stats' command.

        Raises:
            BackendQueryError: If the client fails to answer.
        """
        try:
            raw = self.client.stats()
        except (MemcacheError, OSError) as e:
            logger.debug(f"memcached stats failed on {self.client_name}: {e!r}")
            raise BackendQueryError(f"memcached stats query failed: {e}") from e
        return normalize_stats(raw)

    def is_persistent(self) -> bool:
        return True
