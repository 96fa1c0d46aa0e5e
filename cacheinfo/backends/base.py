"""Boundary types shared with the cache-pool collaborator.

The pool owns creation, get/set/delete and expiry of entries. This package
only needs a handle on the backend a pool writes to, plus the accessor
interfaces each backend family exposes for inspection.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


class CacheBackend(ABC):
    """Abstract base class for cache storage backends (drivers)."""

    @classmethod
    def is_available(cls) -> bool:
        """Whether the runtime this backend needs is installed."""
        return True

    @abstractmethod
    def is_persistent(self) -> bool:
        """Whether stored data outlives the current process or request."""
        ...


@runtime_checkable
class StoreIterator(Protocol):
    """Enumeration handle over a keyspace, filtered by a key pattern.

    A single handle serves both item listing and aggregate counters.
    """

    def __iter__(self) -> Iterator[dict[str, Any]]: ...

    def total_count(self) -> int: ...

    def total_hits(self) -> int: ...

    def total_size(self) -> int: ...


@runtime_checkable
class EnumerableStore(Protocol):
    """A store whose keyspace can be enumerated."""

    def iterate(self, pattern: str) -> StoreIterator: ...


@runtime_checkable
class EnumerableBackend(Protocol):
    """A backend writing namespaced keys to an enumerable store."""

    store: EnumerableStore
    installation_id: str
    namespace: str | None

    def make_key(self, segments: list[str]) -> str: ...


@runtime_checkable
class StatsClient(Protocol):
    """A client answering a single aggregate statistics query."""

    client_name: str

    def stats(self) -> Mapping[str, Any]: ...


@runtime_checkable
class InfoClient(Protocol):
    """A client answering a sectioned server information query."""

    client_name: str

    def info(self) -> Mapping[str, Any]: ...


@dataclass
class PoolHandle:
    """The parts of a cache pool needed to inspect it."""

    backend: CacheBackend
    namespace: str | None = None
