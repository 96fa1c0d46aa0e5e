"""Backend chaining an ordered list of child backends."""

from collections.abc import Iterable

from cacheinfo.backends.base import CacheBackend


class CompositeBackend(CacheBackend):
    """Fans reads and writes out across child backends, in order."""

    def __init__(self, drivers: Iterable[CacheBackend] | None = None):
        """Initialize CompositeBackend.

        Args:
            drivers: Child backends, fastest first.
        """
        self.drivers: list[CacheBackend] = list(drivers or [])

    def is_persistent(self) -> bool:
        return any(driver.is_persistent() for driver in self.drivers)
