"""Resolution of backends to the adapter responsible for them."""

import logging

from cacheinfo.adapters.base import BackendAdapter
from cacheinfo.adapters.composite import CompositeAdapter
from cacheinfo.adapters.distributed_kv import DistributedKVAdapter
from cacheinfo.adapters.generic import GenericAdapter
from cacheinfo.adapters.local_memory import LocalMemoryAdapter
from cacheinfo.adapters.network_kv import NetworkKVAdapter
from cacheinfo.backends.base import CacheBackend
from cacheinfo.backends.registry import DriverRegistry
from cacheinfo.consts import DRIVER_COMPOSITE, DRIVER_MEMCACHE, DRIVER_MEMORY, DRIVER_REDIS
from cacheinfo.errors import UnsupportedBackend
from cacheinfo.models.model_config import KeyGrammarConfig

logger = logging.getLogger(__name__)

# Backend identifier (registered driver name) -> adapter class
DEFAULT_ADAPTERS: dict[str, type[BackendAdapter]] = {
    DRIVER_MEMORY: LocalMemoryAdapter,
    DRIVER_MEMCACHE: NetworkKVAdapter,
    DRIVER_REDIS: DistributedKVAdapter,
    DRIVER_COMPOSITE: CompositeAdapter,
}

# Used for any backend without a table entry
FALLBACK_ADAPTER: type[BackendAdapter] = GenericAdapter


class AdapterResolver:
    """Maps backends to adapters through an explicit registration table.

    A backend is identified by its registered driver name, or by its class
    name when it is not registered. Identifiers missing from the table
    resolve to GenericAdapter, unless strict resolution is requested.
    """

    def __init__(
        self,
        registry: DriverRegistry | None = None,
        adapters: dict[str, type[BackendAdapter]] | None = None,
        config: KeyGrammarConfig | None = None,
    ):
        """Initialize AdapterResolver.

        Args:
            registry: Driver name registry. Defaults to DriverRegistry().
            adapters: Identifier -> adapter class table. Defaults to DEFAULT_ADAPTERS.
            config: Key grammar handed to key-aware adapters.
        """
        self.registry = registry or DriverRegistry()
        self.adapters = dict(DEFAULT_ADAPTERS if adapters is None else adapters)
        self.config = config or KeyGrammarConfig()

    def register(self, identifier: str, adapter_class: type[BackendAdapter]) -> None:
        """Add or replace the adapter for a backend identifier."""
        if not (isinstance(adapter_class, type) and issubclass(adapter_class, BackendAdapter)):
            raise TypeError(f"Adapter for '{identifier}' must be a BackendAdapter subclass")
        self.adapters[identifier] = adapter_class

    def identify(self, backend: CacheBackend) -> str:
        """Registered driver name of the backend, or its class name."""
        return self.registry.resolve_name(backend)

    def get_adapter_class(self, backend: CacheBackend) -> type[BackendAdapter] | None:
        return self.adapters.get(self.identify(backend))

    def resolve(self, backend: CacheBackend, pool_namespace: str | None = None) -> BackendAdapter:
        """Adapter for the backend, falling back to GenericAdapter."""
        adapter_class = self.get_adapter_class(backend)
        if adapter_class is None:
            logger.warning(
                f"No adapter for backend '{self.identify(backend)}', using {FALLBACK_ADAPTER.__name__}"
            )
            adapter_class = FALLBACK_ADAPTER
        else:
            logger.debug(f"Resolved backend '{self.identify(backend)}' to {adapter_class.__name__}")

        return adapter_class.create(backend, pool_namespace, resolver=self)

    def resolve_or_fail(
        self, backend: CacheBackend, pool_namespace: str | None = None
    ) -> BackendAdapter:
        """Adapter for the backend.

        Raises:
            UnsupportedBackend: If no adapter is registered for the backend.
        """
        adapter_class = self.get_adapter_class(backend)
        if adapter_class is None:
            raise UnsupportedBackend(f"Unsupported backend: {type(backend).__name__}")

        return adapter_class.create(backend, pool_namespace, resolver=self)
