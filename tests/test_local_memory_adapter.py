"""Tests for the in-process memory adapter."""

from collections.abc import Callable

import pytest

from cacheinfo.adapters.local_memory import LocalMemoryAdapter, is_prebuilt_pattern
from cacheinfo.backends.ephemeral import EphemeralBackend
from cacheinfo.backends.memory import MemoryBackend, MemoryStore
from cacheinfo.errors import BackendUnavailable, InvalidKeySegment, InvalidSearchQuery


@pytest.fixture
def adapter(memory_backend: MemoryBackend) -> LocalMemoryAdapter:
    """Create an adapter for pool 'app1'."""
    return LocalMemoryAdapter(memory_backend, pool_namespace="app1", driver_name="memory")


class TestIsPrebuiltPattern:
    """Tests for detecting search strings that are already patterns."""

    @pytest.mark.parametrize("search", ["^users", "users$", "a::b", "/users/", "x{2}", "why?"])
    def test_patterns(self, search: str) -> None:
        assert is_prebuilt_pattern(search)

    @pytest.mark.parametrize("search", ["users", "users/42", "user-list"])
    def test_key_names(self, search: str) -> None:
        assert not is_prebuilt_pattern(search)


class TestSearchQuery:
    """Tests for search query formatting."""

    def test_whole_pool(self, adapter: LocalMemoryAdapter, installation_id: str) -> None:
        """Test no search covers the data and lock prefixes of the pool."""
        query = adapter.format_search_query()
        assert query == (
            f"/^{installation_id}::myapp::data::app1|^{installation_id}::myapp::lock::app1/"
        )

    def test_single_key(self, adapter: LocalMemoryAdapter, installation_id: str) -> None:
        query = adapter.format_search_query("users/42")
        assert f"^{installation_id}::myapp::data::app1::users::42" in query
        assert f"^{installation_id}::myapp::lock::app1::users::42" in query

    def test_key_list(self, adapter: LocalMemoryAdapter) -> None:
        """Test every key gets a data and a lock alternative."""
        keys = adapter.format_search_keys(["users", "posts"])
        assert keys.count("|") == 3
        assert keys.index("users") < keys.index("posts")

    def test_data_namespace_only(
        self, adapter: LocalMemoryAdapter, installation_id: str
    ) -> None:
        """Test summaries search the data namespace alone."""
        query = adapter.format_search_query("users", ("data",))
        assert query == f"/^{installation_id}::myapp::data::app1::users/"

    def test_prebuilt_pattern_passthrough(self, adapter: LocalMemoryAdapter) -> None:
        assert adapter.format_search_query("/^anything/i") == "/^anything/i"

    def test_key_metacharacters_escaped(self, adapter: LocalMemoryAdapter) -> None:
        """Test dots and plus signs in key names are matched literally."""
        query = adapter.format_search_query("file.name+v2")
        assert r"file\.name\+v2" in query

    def test_invalid_type(self, adapter: LocalMemoryAdapter) -> None:
        with pytest.raises(InvalidSearchQuery):
            adapter.format_search_keys(42)  # type: ignore[arg-type]

    def test_list_with_non_strings(self, adapter: LocalMemoryAdapter) -> None:
        with pytest.raises(InvalidSearchQuery):
            adapter.format_search_keys(["users", 1])  # type: ignore[list-item]

    def test_empty_path_node(self, adapter: LocalMemoryAdapter) -> None:
        with pytest.raises(InvalidKeySegment):
            adapter.format_search_keys("users//42")


class TestListItems:
    """Tests for listing items."""

    def test_lists_pool_items(
        self, adapter: LocalMemoryAdapter, store_item: Callable[..., str]
    ) -> None:
        raw_key = store_item("users/42", {"name": "Ada"}, ttl=60)

        items = list(adapter.list_items())

        assert len(items) == 1
        item = items[0]
        assert item.key == raw_key
        assert item.type == "data"
        assert item.formatted_key == "users ⇒ 42"
        assert item.value == {"name": "Ada"}
        assert item.ttl == 60
        assert item.expiration_time == item.creation_time + 60
        assert item.hits == 0
        assert item.misses is None
        assert item.locked is None

    def test_skips_other_pools(
        self, adapter: LocalMemoryAdapter, store_item: Callable[..., str]
    ) -> None:
        store_item("users", 1)
        store_item("users", 2, pool_namespace="other")

        assert [item.value for item in adapter.list_items()] == [1]

    def test_skips_other_applications(
        self,
        adapter: LocalMemoryAdapter,
        memory_store: MemoryStore,
        installation_id: str,
        store_item: Callable[..., str],
    ) -> None:
        other_app = MemoryBackend(
            namespace="otherapp", store=memory_store, installation_id=installation_id
        )
        store_item("users", 1)
        store_item("users", 2, backend=other_app)

        assert [item.value for item in adapter.list_items()] == [1]

    def test_includes_lock_markers(
        self, adapter: LocalMemoryAdapter, store_item: Callable[..., str]
    ) -> None:
        """Test lock markers are enumerated with their item type."""
        store_item("users", 1)
        store_item("users", True, item_namespace="lock")

        types = [item.type for item in adapter.list_items()]
        assert types == ["data", "lock"]

    def test_search_by_key(
        self, adapter: LocalMemoryAdapter, store_item: Callable[..., str]
    ) -> None:
        store_item("users/42", 1)
        store_item("posts/7", 2)

        assert [item.formatted_key for item in adapter.list_items("users")] == ["users ⇒ 42"]
        assert [item.formatted_key for item in adapter.list_items(["posts", "users/42"])] == [
            "users ⇒ 42",
            "posts ⇒ 7",
        ]

    def test_reflects_store_at_call_time(
        self, adapter: LocalMemoryAdapter, store_item: Callable[..., str]
    ) -> None:
        """Test each call reads the store again."""
        assert list(adapter.list_items()) == []

        store_item("users", 1)
        assert len(list(adapter.list_items())) == 1

    def test_hits_reported(
        self,
        adapter: LocalMemoryAdapter,
        memory_store: MemoryStore,
        store_item: Callable[..., str],
    ) -> None:
        raw_key = store_item("users", 1)
        memory_store.fetch(raw_key)
        memory_store.fetch(raw_key)

        assert next(adapter.list_items()).hits == 2


class TestFormatItem:
    """Tests for mapping store entries to records."""

    def test_unparseable_key(self, adapter: LocalMemoryAdapter) -> None:
        """Test keys outside the grammar keep their raw form."""
        record = adapter.format_item({"key": "not-a-cache-key", "value": "x"})

        assert record.type is None
        assert record.formatted_key == "not-a-cache-key"
        assert record.value == "x"
        assert record.creation_time is None
        assert record.expiration_time is None

    def test_field_mapping(self, adapter: LocalMemoryAdapter, installation_id: str) -> None:
        record = adapter.format_item(
            {
                "key": f"{installation_id}::myapp::data::app1::users::42",
                "value": 7,
                "num_hits": 3,
                "mtime": 1652381705,
                "creation_time": 1652381700,
                "deletion_time": 0,
                "access_time": 1652381710,
                "mem_size": 10280,
                "ttl": 3600,
            }
        )

        assert record.modified_time == 1652381705
        assert record.access_time == 1652381710
        assert record.deletion_time == 0
        assert record.hits == 3
        assert record.size == 10280
        assert record.expiration_time == 1652381700 + 3600


class TestSummary:
    """Tests for aggregate counters."""

    def test_empty_pool(self, adapter: LocalMemoryAdapter) -> None:
        summary = adapter.summary()

        assert summary.name == "memory"
        assert summary.translatable_name == "cache.driver.memory.label"
        assert summary.is_available
        assert summary.is_persistent
        assert summary.total_count == 0
        assert summary.total_hits == 0
        assert summary.total_size == 0
        assert summary.total_misses is None

    def test_counts_pool_entries(
        self,
        adapter: LocalMemoryAdapter,
        memory_store: MemoryStore,
        store_item: Callable[..., str],
    ) -> None:
        first = store_item("users/1", "a")
        store_item("users/2", "b")
        store_item("users/3", "c", pool_namespace="other")
        memory_store.fetch(first)

        summary = adapter.summary()

        assert summary.total_count == 2
        assert summary.total_hits == 1
        assert summary.total_size > 0

    def test_lock_markers_not_counted(
        self,
        adapter: LocalMemoryAdapter,
        memory_store: MemoryStore,
        store_item: Callable[..., str],
    ) -> None:
        """Test totals agree with the items a pool lists."""
        lock_key = store_item("users/42", True, item_namespace="lock")
        store_item("users/42", {"name": "Ada"})
        memory_store.fetch(lock_key)

        summary = adapter.summary()

        assert summary.total_count == 1
        assert summary.total_hits == 0
        assert adapter.summary("users/42").total_count == 1

    def test_search_narrows_totals(
        self, adapter: LocalMemoryAdapter, store_item: Callable[..., str]
    ) -> None:
        store_item("users/1", "a")
        store_item("posts/1", "b")

        assert adapter.summary("posts").total_count == 1


class TestStore:
    """Tests for store access."""

    def test_store_must_enumerate(self, memory_backend: MemoryBackend) -> None:
        memory_backend.store = {}  # type: ignore[assignment]
        adapter = LocalMemoryAdapter(memory_backend, pool_namespace="app1")

        with pytest.raises(BackendUnavailable):
            list(adapter.list_items())

    def test_backend_without_store(self) -> None:
        """Test a backend lacking the store capability is reported unavailable."""
        adapter = LocalMemoryAdapter(EphemeralBackend(), pool_namespace="app1")

        with pytest.raises(BackendUnavailable):
            list(adapter.list_items())
        with pytest.raises(BackendUnavailable):
            adapter.summary()
        with pytest.raises(BackendUnavailable):
            adapter.get_codec()

    def test_codec_reused(self, adapter: LocalMemoryAdapter) -> None:
        assert adapter.get_codec() is adapter.get_codec()
