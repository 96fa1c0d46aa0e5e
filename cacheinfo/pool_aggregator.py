"""Per-pool facade over the adapter of the pool's backend.

Notes:

- The item search query is either a single key name or a list of key names.
  If None (or an empty list), the entire pool is queried.
- Stampede lock markers never appear in the listed items. Instead, the items
  they guard are flagged as locked.
"""

import logging
import re
from collections.abc import Iterable, Iterator

from cacheinfo.adapters.base import BackendAdapter, SearchQuery
from cacheinfo.adapters.resolver import AdapterResolver
from cacheinfo.backends.base import PoolHandle
from cacheinfo.consts import POOL_LABEL_TEMPLATE
from cacheinfo.errors import InvalidSearchQuery
from cacheinfo.models.model_cache import CacheItemRecord, CacheSummary, StampedeFlagSet
from cacheinfo.models.model_config import KeyGrammarConfig

logger = logging.getLogger(__name__)

_MARKUP = re.compile(r"<[^>]*>?")
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_name(value: str) -> str | None:
    """Strip markup and control characters from a key or pool name.

    Returns:
        The cleaned name, or None if nothing is left.
    """
    cleaned = _CONTROL_CHARACTERS.sub("", _MARKUP.sub("", value)).strip()
    return cleaned or None


class PoolAggregator:
    """Reports statistics and items for one cache pool.

    The adapter for the pool's backend is resolved once and reused. Like the
    adapters, an aggregator is meant for one caller at a time; share it across
    threads only after warming it up (e.g. by calling get_adapter()).
    """

    def __init__(
        self,
        pool: PoolHandle,
        resolver: AdapterResolver | None = None,
        config: KeyGrammarConfig | None = None,
    ):
        """Initialize PoolAggregator.

        Args:
            pool: Handle on the pool's backend and namespace.
            resolver: Adapter resolver. Defaults to AdapterResolver(config=config).
            config: Key grammar constants. Defaults to the resolver's.

        Raises:
            ValueError: If config differs from the resolver's key grammar.
        """
        self.pool = pool
        if resolver is None:
            resolver = AdapterResolver(config=config)
        elif config is not None and config != resolver.config:
            raise ValueError("Key grammar config differs from the resolver's config")
        self.resolver = resolver
        self.config = resolver.config
        self._adapter: BackendAdapter | None = None

    def get_pool(self) -> PoolHandle:
        return self.pool

    def get_pool_namespace(self) -> str:
        """The pool's namespace, or the default namespace if it has none."""
        return self.pool.namespace or self.config.default_pool_namespace

    def get_name(self) -> str:
        return self.get_pool_namespace()

    def get_translatable_name(self) -> str:
        return POOL_LABEL_TEMPLATE.format(name=self.get_name())

    def get_adapter(self) -> BackendAdapter:
        """Adapter for the pool's backend, resolved on first use."""
        if self._adapter is None:
            self._adapter = self.resolver.resolve(self.pool.backend, self.get_pool_namespace())
        return self._adapter

    def is_available(self) -> bool:
        return self.get_adapter().is_available()

    def is_persistent(self) -> bool:
        return self.get_adapter().is_persistent()

    def is_save_deferrable(self) -> bool:
        """Whether the pool supports deferred saves. Never inspected, always False."""
        return False

    @staticmethod
    def is_valid_item_pool(pool_name: str) -> bool:
        """Pool names are ASCII alphanumeric."""
        return pool_name.isascii() and pool_name.isalnum()

    def assert_valid_item_pool(self, pool_name: str) -> None:
        if not self.is_valid_item_pool(pool_name):
            raise ValueError(f'Invalid "{pool_name}" cache item pool name.')

    def filter_item_key(self, key: str) -> str | None:
        return sanitize_name(key)

    def filter_item_keys(self, keys: Iterable[object]) -> list[str]:
        """Sanitized keys, skipping non-strings and keys left empty."""
        filtered = []
        for key in keys:
            if not isinstance(key, str):
                continue
            cleaned = self.filter_item_key(key)
            if cleaned is not None:
                filtered.append(cleaned)
        return filtered

    def filter_item_pool(self, pool_name: str) -> str | None:
        return sanitize_name(pool_name)

    def resolve_search_query(self, search: SearchQuery = None) -> SearchQuery:
        """Normalize a search query before it reaches the adapter.

        Keys in a list are sanitized and blank ones dropped; a list left empty
        means no search.

        Raises:
            InvalidSearchQuery: If search is not None, a string or a list of strings.
        """
        if search is None or isinstance(search, str):
            return search

        if isinstance(search, list):
            keys = self.filter_item_keys(search)
            return keys or None

        raise InvalidSearchQuery(f"Expected a key name or a list of key names, got {search!r}")

    def list_items(self, search: SearchQuery = None) -> Iterator[CacheItemRecord]:
        """Lazily list the pool's items, flagging those with a stampede lock.

        Lock flags are gathered during the same pass that yields the items,
        so an item enumerated before its lock marker is reported unlocked.
        """
        items = self.get_adapter().list_items(self.resolve_search_query(search))
        return self.filter_stampede_locks(items)

    def filter_stampede_locks(self, items: Iterable[CacheItemRecord]) -> Iterator[CacheItemRecord]:
        """Drop lock markers and set `locked` on the remaining items."""
        flags: StampedeFlagSet = {}
        lock_namespace = self.config.lock_namespace

        for item in items:
            item_id = item.formatted_key or item.key or ""

            if item.type == lock_namespace:
                logger.debug(f"Stampede lock marker found for {item_id}")
                flags[item_id] = True
                continue

            locked = flags.setdefault(item_id, False)
            yield item.model_copy(update={"locked": locked})

    def summary(self, search: SearchQuery = None) -> CacheSummary:
        return self.get_adapter().summary(self.resolve_search_query(search))


def main() -> None:
    """Example usage of PoolAggregator."""
    from cacheinfo.backends.memory import MemoryBackend, MemoryStore

    logging.basicConfig(level=logging.DEBUG)

    backend = MemoryBackend(namespace="example", store=MemoryStore())
    pool = PoolHandle(backend=backend, namespace="app1")
    aggregator = PoolAggregator(pool)

    print("=== PoolAggregator Example ===\n")

    # Write entries the way a cache pool would
    prefix = ["data", "app1"]
    backend.store.store(backend.make_key([*prefix, "users", "42"]), {"name": "Ada"}, ttl=3600)
    backend.store.store(backend.make_key(["lock", "app1", "posts", "7"]), True)
    backend.store.store(backend.make_key([*prefix, "posts", "7"]), "draft")

    print("1. Listing items...")
    for item in aggregator.list_items():
        print(f"   {item.formatted_key}: {item.value!r} (locked: {item.locked})")

    print("\n2. Summary...")
    summary = aggregator.summary()
    print(f"   Driver: {summary.name}")
    print(f"   Items: {summary.total_count}")
    print(f"   Size: {summary.total_size} bytes")


if __name__ == "__main__":
    main()
