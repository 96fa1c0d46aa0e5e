"""Adapter for in-process memory stores with an enumerable keyspace."""

import logging
import re
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from cacheinfo.adapters.base import BackendAdapter, SearchQuery
from cacheinfo.backends.base import (
    CacheBackend,
    EnumerableBackend,
    EnumerableStore,
    StoreIterator,
)
from cacheinfo.consts import SEARCH_PATTERN_DELIMITED, SEARCH_PATTERN_METACHARACTERS
from cacheinfo.errors import BackendUnavailable, InvalidSearchQuery
from cacheinfo.keys.codec import KeyCodec
from cacheinfo.models.model_cache import CacheItemRecord, CacheSummary
from cacheinfo.models.model_config import KeyGrammarConfig

if TYPE_CHECKING:
    from cacheinfo.adapters.resolver import AdapterResolver

logger = logging.getLogger(__name__)


def is_prebuilt_pattern(search: str) -> bool:
    """Whether a search string is already a pattern rather than a key name."""
    return bool(
        re.search(SEARCH_PATTERN_METACHARACTERS, search)
        or re.match(SEARCH_PATTERN_DELIMITED, search, re.DOTALL)
    )


class LocalMemoryAdapter(BackendAdapter):
    """Lists items and counters of a shared in-process store.

    Every call takes one enumeration handle from the store and reads items
    or counters from it. Search keys are turned into prefix-anchored
    patterns covering both the data and the lock item namespaces, so stampede
    lock markers are enumerated along with the data they guard.

    The backend must be an EnumerableBackend: an enumerable store, the
    installation ID, the application namespace and a make_key(segments)
    function. Anything else raises BackendUnavailable on first use.

    Lock markers are not user data, so summaries count the data namespace only.
    """

    def __init__(
        self,
        backend: CacheBackend,
        pool_namespace: str | None = None,
        driver_name: str | None = None,
        config: KeyGrammarConfig | None = None,
    ):
        super().__init__(backend, pool_namespace, driver_name)
        self.config = config or KeyGrammarConfig()
        self._codec: KeyCodec | None = None

    @classmethod
    def create(
        cls,
        backend: CacheBackend,
        pool_namespace: str | None = None,
        resolver: "AdapterResolver | None" = None,
    ) -> "LocalMemoryAdapter":
        if resolver is None:
            return cls(backend, pool_namespace)
        return cls(
            backend,
            pool_namespace,
            driver_name=resolver.identify(backend),
            config=resolver.config,
        )

    def is_driver_supported(self) -> bool:
        return True

    def get_enumerable_backend(self) -> EnumerableBackend:
        """The backend, checked for the enumerable-store capability.

        Raises:
            BackendUnavailable: If the backend lacks the store, the key layout or make_key.
        """
        if not isinstance(self.backend, EnumerableBackend):
            raise BackendUnavailable(
                f"Backend {type(self.backend).__name__} does not expose an enumerable store"
            )
        return self.backend

    def get_codec(self) -> KeyCodec:
        """Key codec for this backend and pool, built on first use."""
        if self._codec is None:
            backend = self.get_enumerable_backend()
            self._codec = KeyCodec(
                installation_id=backend.installation_id,
                application_namespace=backend.namespace,
                pool_namespace=self.pool_namespace,
                config=self.config,
                key_maker=backend.make_key,
            )
        return self._codec

    def get_store(self) -> EnumerableStore:
        """The backend's store.

        Raises:
            BackendUnavailable: If the store cannot enumerate its keys.
        """
        store = self.get_enumerable_backend().store
        if not isinstance(store, EnumerableStore):
            raise BackendUnavailable(f"{self.get_name()} store does not support enumeration")
        return store

    def create_iterator(
        self, search: SearchQuery = None, item_namespaces: tuple[str, ...] | None = None
    ) -> StoreIterator:
        store = self.get_store()
        pattern = self.format_search_query(search, item_namespaces)
        logger.debug(f"Enumerating {self.get_name()} with pattern {pattern}")
        return store.iterate(pattern)

    def list_items(self, search: SearchQuery = None) -> Iterator[CacheItemRecord]:
        iterator = self.create_iterator(search)
        return (self.format_item(item) for item in iterator)

    def summary(self, search: SearchQuery = None) -> CacheSummary:
        summary = self.base_summary()
        iterator = self.create_iterator(search, (self.config.data_namespace,))
        return summary.model_copy(
            update={
                "total_count": iterator.total_count(),
                "total_hits": iterator.total_hits(),
                "total_size": iterator.total_size(),
            }
        )

    def format_search_query(
        self, search: SearchQuery = None, item_namespaces: tuple[str, ...] | None = None
    ) -> str:
        """Turn a search query into a store pattern.

        Strings containing pattern metacharacters, or wrapped in '/.../', are
        used verbatim. Anything else is treated as key names, searched in the
        given item namespaces (data and lock by default).
        """
        if isinstance(search, str) and is_prebuilt_pattern(search):
            return search

        return f"/{self.format_search_keys(search, item_namespaces)}/"

    def format_search_keys(
        self, search: SearchQuery = None, item_namespaces: tuple[str, ...] | None = None
    ) -> str:
        """Prefix-anchored alternation of the composed keys.

        Raises:
            InvalidSearchQuery: If search is not None, a string or a list of strings.
            InvalidKeySegment: If a key has an empty path node.
        """
        if search is None:
            keys: list[str | None] = [None]
        elif isinstance(search, str):
            keys = [search]
        elif isinstance(search, list) and all(isinstance(key, str) for key in search):
            keys = list(search)
        else:
            raise InvalidSearchQuery(f"Expected a key name or a list of key names, got {search!r}")

        if item_namespaces is None:
            item_namespaces = self.config.item_namespaces

        codec = self.get_codec()
        return "|".join(
            f"^{codec.compose(item_namespace, key, quote=True)}"
            for key in keys
            for item_namespace in item_namespaces
        )

    def format_item(self, item: dict[str, Any]) -> CacheItemRecord:
        """Map a store entry onto a CacheItemRecord.

        Store entries look like:
            {
                "type": "user",
                "key": "<installation>::data::default::users::42",
                "value": ...,
                "num_hits": 0,
                "mtime": 1652381705,
                "creation_time": 1652381705,
                "deletion_time": 0,
                "access_time": 1652381705,
                "ref_count": 0,
                "mem_size": 10280,
                "ttl": 3600,
            }
        """
        key = item["key"]
        codec = self.get_codec()
        components = codec.parse(key)

        return CacheItemRecord(
            type=components.item_namespace if components else None,
            key=key,
            formatted_key=codec.format_key(key, components),
            value=item.get("value"),
            creation_time=item.get("creation_time"),
            modified_time=item.get("mtime"),
            deletion_time=item.get("deletion_time"),
            access_time=item.get("access_time"),
            ttl=item.get("ttl"),
            hits=item.get("num_hits"),
            size=item.get("mem_size"),
        )
