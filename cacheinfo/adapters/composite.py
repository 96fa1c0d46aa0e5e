"""Adapter for backends that chain an ordered list of child backends."""

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from cacheinfo.adapters.base import BackendAdapter, SearchQuery
from cacheinfo.backends.base import CacheBackend
from cacheinfo.backends.composite import CompositeBackend
from cacheinfo.errors import EmptyAggregate
from cacheinfo.models.model_cache import CacheItemRecord, CacheSummary

if TYPE_CHECKING:
    from cacheinfo.adapters.resolver import AdapterResolver

logger = logging.getLogger(__name__)


class CompositeAdapter(BackendAdapter):
    """Reports on a composite backend through one representative child.

    The representative is the first persistent child, or the first child if
    none is persistent. It is chosen once and every contract method is
    delegated to its adapter. The full child list stays available through
    get_all_drivers() and its persistent/transient partitions.

    Children are read lazily: a composite without children raises
    EmptyAggregate on first use, not on construction.
    """

    def __init__(
        self,
        backend: CacheBackend,
        pool_namespace: str | None = None,
        driver_name: str | None = None,
        resolver: "AdapterResolver | None" = None,
    ):
        super().__init__(backend, pool_namespace, driver_name)
        self._resolver = resolver
        self._drivers: list[CacheBackend] | None = None
        self._representative: BackendAdapter | None = None

    @classmethod
    def create(
        cls,
        backend: CacheBackend,
        pool_namespace: str | None = None,
        resolver: "AdapterResolver | None" = None,
    ) -> "CompositeAdapter":
        driver_name = resolver.identify(backend) if resolver is not None else None
        return cls(backend, pool_namespace, driver_name=driver_name, resolver=resolver)

    def get_resolver(self) -> "AdapterResolver":
        if self._resolver is None:
            from cacheinfo.adapters.resolver import AdapterResolver

            self._resolver = AdapterResolver()
        return self._resolver

    def get_all_drivers(self) -> list[CacheBackend]:
        """Child backends, in chain order.

        Raises:
            EmptyAggregate: If the children cannot be read or there are none.
        """
        if self._drivers is None:
            if not isinstance(self.backend, CompositeBackend):
                raise EmptyAggregate(
                    f"Unable to read child backends from {type(self.backend).__name__}"
                )
            if not self.backend.drivers:
                raise EmptyAggregate("Composite backend has no child backends")
            self._drivers = list(self.backend.drivers)
        return self._drivers

    def get_first_driver(self) -> CacheBackend:
        return self.get_all_drivers()[0]

    def get_first_persistent_driver(self) -> CacheBackend | None:
        for driver in self.get_all_drivers():
            if driver.is_persistent():
                return driver
        return None

    def get_persistent_drivers(self) -> list[CacheBackend]:
        return [driver for driver in self.get_all_drivers() if driver.is_persistent()]

    def get_transient_drivers(self) -> list[CacheBackend]:
        return [driver for driver in self.get_all_drivers() if not driver.is_persistent()]

    def get_representative_driver(self) -> CacheBackend:
        return self.get_first_persistent_driver() or self.get_first_driver()

    def get_representative_adapter(self) -> BackendAdapter:
        """Adapter of the representative child, resolved once."""
        if self._representative is None:
            driver = self.get_representative_driver()
            self._representative = self.get_resolver().resolve(driver, self.pool_namespace)
            logger.debug(
                f"Composite {self.driver_name or type(self.backend).__name__} reports through "
                f"{type(self._representative).__name__}"
            )
        return self._representative

    def is_driver_aggregator(self) -> bool:
        return True

    # Contract methods, delegated to the representative child

    def get_name(self) -> str:
        return self.get_representative_adapter().get_name()

    def get_translatable_name(self) -> str:
        return self.get_representative_adapter().get_translatable_name()

    def is_driver_supported(self) -> bool:
        return self.get_representative_adapter().is_driver_supported()

    def is_available(self) -> bool:
        return self.get_representative_adapter().is_available()

    def is_persistent(self) -> bool:
        return self.get_representative_adapter().is_persistent()

    def list_items(self, search: SearchQuery = None) -> Iterator[CacheItemRecord]:
        return self.get_representative_adapter().list_items(search)

    def summary(self, search: SearchQuery = None) -> CacheSummary:
        return self.get_representative_adapter().summary(search)

    def base_summary(self) -> CacheSummary:
        return self.get_representative_adapter().base_summary()
