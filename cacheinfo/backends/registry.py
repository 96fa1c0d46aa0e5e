"""Registry of backend classes by driver name."""

import logging

from cacheinfo.backends.base import CacheBackend
from cacheinfo.backends.composite import CompositeBackend
from cacheinfo.backends.ephemeral import EphemeralBackend
from cacheinfo.backends.memcache import MemcacheBackend
from cacheinfo.backends.memory import MemoryBackend
from cacheinfo.backends.redis_backend import RedisBackend
from cacheinfo.consts import (
    DRIVER_COMPOSITE,
    DRIVER_EPHEMERAL,
    DRIVER_MEMCACHE,
    DRIVER_MEMORY,
    DRIVER_REDIS,
)

logger = logging.getLogger(__name__)

DEFAULT_DRIVERS: dict[str, type[CacheBackend]] = {
    DRIVER_MEMORY: MemoryBackend,
    DRIVER_EPHEMERAL: EphemeralBackend,
    DRIVER_MEMCACHE: MemcacheBackend,
    DRIVER_REDIS: RedisBackend,
    DRIVER_COMPOSITE: CompositeBackend,
}


class DriverRegistry:
    """Maps driver names to backend classes and back."""

    def __init__(self, drivers: dict[str, type[CacheBackend]] | None = None):
        """Initialize DriverRegistry.

        Args:
            drivers: Initial name -> class table. Defaults to DEFAULT_DRIVERS.
        """
        self._drivers: dict[str, type[CacheBackend]] = dict(
            DEFAULT_DRIVERS if drivers is None else drivers
        )

    def register(self, name: str, driver_class: type[CacheBackend]) -> None:
        """Register a backend class under a driver name.

        Raises:
            TypeError: If the class is not a CacheBackend.
            ValueError: If the name is already taken.
        """
        if not (isinstance(driver_class, type) and issubclass(driver_class, CacheBackend)):
            raise TypeError(f"Driver '{name}' must be a CacheBackend subclass, got {driver_class!r}")
        if name in self._drivers:
            raise ValueError(f"Driver '{name}' is already registered")

        self._drivers[name] = driver_class
        logger.debug(f"Registered driver '{name}': {driver_class.__name__}")

    def get_driver_class(self, name: str) -> type[CacheBackend] | None:
        return self._drivers.get(name)

    def all_drivers(self) -> dict[str, type[CacheBackend]]:
        return dict(self._drivers)

    def available_drivers(self) -> dict[str, type[CacheBackend]]:
        """Drivers whose runtime is installed. Composite is always listed."""
        return {
            name: driver_class
            for name, driver_class in self._drivers.items()
            if name == DRIVER_COMPOSITE or driver_class.is_available()
        }

    def name_for(self, backend: CacheBackend) -> str | None:
        """Registered name of the backend's exact class, if any."""
        backend_class = type(backend)
        for name, driver_class in self._drivers.items():
            if driver_class is backend_class:
                return name
        return None

    def resolve_name(self, backend: CacheBackend) -> str:
        """Registered name of the backend, falling back to its class name."""
        return self.name_for(backend) or type(backend).__name__
