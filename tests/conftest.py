"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from cacheinfo.backends.base import PoolHandle
from cacheinfo.backends.memory import MemoryBackend, MemoryStore

INSTALLATION_ID = "0123456789abcdef0123456789abcdef"
POOL_NAMESPACE = "app1"
START_TIME = 1_700_000_000


class FakeClock:
    """Settable clock for MemoryStore."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def installation_id() -> str:
    return INSTALLATION_ID


@pytest.fixture
def start_time() -> int:
    return START_TIME


@pytest.fixture
def clock() -> FakeClock:
    """Create a clock fixed at START_TIME."""
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryStore:
    """Create an isolated memory store."""
    return MemoryStore(clock=clock)


@pytest.fixture
def memory_backend(memory_store: MemoryStore) -> MemoryBackend:
    """Create a memory backend with a fixed installation ID."""
    return MemoryBackend(namespace="myapp", store=memory_store, installation_id=INSTALLATION_ID)


@pytest.fixture
def memory_pool(memory_backend: MemoryBackend) -> PoolHandle:
    """Create a pool handle on the memory backend."""
    return PoolHandle(backend=memory_backend, namespace=POOL_NAMESPACE)


@pytest.fixture
def store_item(memory_backend: MemoryBackend) -> Callable[..., str]:
    """Return a function writing entries the way a pool would."""

    def _store_item(
        item_key: str,
        value: object,
        *,
        item_namespace: str = "data",
        pool_namespace: str | None = POOL_NAMESPACE,
        ttl: int = 0,
        backend: MemoryBackend | None = None,
    ) -> str:
        backend = backend or memory_backend
        segments = [item_namespace]
        if pool_namespace:
            segments.append(pool_namespace)
        segments.extend(item_key.strip("/").split("/"))
        key = backend.make_key(segments)
        backend.store.store(key, value, ttl=ttl)
        return key

    return _store_item
