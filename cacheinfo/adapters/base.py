"""Base adapter defining the inspection contract for all backend families."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from cacheinfo.backends.base import CacheBackend
from cacheinfo.consts import DRIVER_LABEL_TEMPLATE
from cacheinfo.models.model_cache import CacheItemRecord, CacheSummary

if TYPE_CHECKING:
    from cacheinfo.adapters.resolver import AdapterResolver

# None (everything), a single key, or a list of keys
SearchQuery = str | list[str] | None


def coerce_counter(value: Any) -> int | None:
    """Read a backend counter as a non-negative int, or None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        return int(value) if value >= 0 else None
    if isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            return None
        return number if number >= 0 else None
    return None


class BackendAdapter(ABC):
    """Reports normalized statistics and items for one backend.

    Adapters only read from their backend. Every call is a live snapshot of
    the store at call time.
    """

    def __init__(
        self,
        backend: CacheBackend,
        pool_namespace: str | None = None,
        driver_name: str | None = None,
    ):
        """Initialize BackendAdapter.

        Args:
            backend: Backend to inspect.
            pool_namespace: Namespace of the pool writing to the backend.
            driver_name: Registered driver name of the backend, if known.
        """
        self.backend = backend
        self.pool_namespace = pool_namespace or None
        self.driver_name = driver_name

    @classmethod
    def create(
        cls,
        backend: CacheBackend,
        pool_namespace: str | None = None,
        resolver: "AdapterResolver | None" = None,
    ) -> "BackendAdapter":
        """Build an adapter, taking the driver name and settings from the resolver."""
        driver_name = resolver.identify(backend) if resolver is not None else None
        return cls(backend, pool_namespace, driver_name=driver_name)

    def get_backend(self) -> CacheBackend:
        return self.backend

    def get_pool_namespace(self) -> str | None:
        return self.pool_namespace

    def get_name(self) -> str:
        return self.driver_name or type(self.backend).__name__

    def get_translatable_name(self) -> str:
        return DRIVER_LABEL_TEMPLATE.format(name=self.get_name())

    def is_driver_aggregator(self) -> bool:
        """Whether the backend chains other backends."""
        return False

    @abstractmethod
    def is_driver_supported(self) -> bool:
        """Whether this adapter can report on its backend."""
        ...

    def is_available(self) -> bool:
        return self.is_driver_supported()

    def is_persistent(self) -> bool:
        return self.backend.is_persistent()

    def list_items(self, search: SearchQuery = None) -> Iterator[CacheItemRecord]:
        """Lazily list the backend's items. Empty unless the backend can enumerate."""
        return iter(())

    def summary(self, search: SearchQuery = None) -> CacheSummary:
        """Aggregate statistics. Counters the backend does not report are None."""
        return self.base_summary()

    def base_summary(self) -> CacheSummary:
        return CacheSummary(
            name=self.get_name(),
            translatable_name=self.get_translatable_name(),
            is_available=self.is_available(),
            is_persistent=self.is_persistent(),
        )
