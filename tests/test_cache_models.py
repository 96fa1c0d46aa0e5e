"""Tests for the normalized record models."""

import json

import pytest
from pydantic import ValidationError

from cacheinfo.models.model_cache import CacheItemRecord, CacheSummary
from cacheinfo.models.model_config import KeyGrammarConfig
from cacheinfo.models.model_keys import ItemNamespace, KeyComponents


class TestCacheItemRecord:
    """Tests for CacheItemRecord."""

    def test_unknown_fields_stay_none(self) -> None:
        record = CacheItemRecord()

        for name in CacheItemRecord.model_fields:
            assert getattr(record, name) is None

    def test_expiration_derived(self) -> None:
        record = CacheItemRecord(creation_time=1_700_000_000, ttl=300)
        assert record.expiration_time == 1_700_000_300

    def test_expiration_with_zero_ttl(self) -> None:
        """Test a zero TTL still yields creation + ttl."""
        record = CacheItemRecord(creation_time=1_700_000_000, ttl=0)
        assert record.expiration_time == 1_700_000_000

    def test_expiration_needs_both_inputs(self) -> None:
        assert CacheItemRecord(creation_time=1_700_000_000).expiration_time is None
        assert CacheItemRecord(ttl=300).expiration_time is None

    def test_explicit_expiration_kept(self) -> None:
        record = CacheItemRecord(creation_time=100, ttl=10, expiration_time=500)
        assert record.expiration_time == 500

    def test_copy_keeps_expiration(self) -> None:
        record = CacheItemRecord(creation_time=100, ttl=10)
        locked = record.model_copy(update={"locked": True})

        assert locked.locked is True
        assert locked.expiration_time == 110
        assert record.locked is None

    def test_json_dump(self) -> None:
        record = CacheItemRecord(
            type="data", key="k", formatted_key="users ⇒ 42", value={"a": [1, 2]}, hits=0
        )

        data = json.loads(record.model_dump_json())

        assert data["formatted_key"] == "users ⇒ 42"
        assert data["value"] == {"a": [1, 2]}
        assert data["hits"] == 0
        assert data["misses"] is None


class TestCacheSummary:
    """Tests for CacheSummary."""

    def test_defaults(self) -> None:
        summary = CacheSummary(name="memory", translatable_name="cache.driver.memory.label")

        assert not summary.is_available
        assert not summary.is_persistent
        assert summary.total_count is None
        assert summary.total_hits is None
        assert summary.total_misses is None
        assert summary.total_size is None

    def test_rejects_negative_counters(self) -> None:
        with pytest.raises(ValidationError):
            CacheSummary(name="x", translatable_name="x", total_count=-1)


class TestKeyModels:
    """Tests for key components and grammar configuration."""

    def test_item_path(self) -> None:
        components = KeyComponents(
            installation_id="0" * 32,
            item_namespace=ItemNamespace.DATA.value,
            pool_namespace="app1",
            item_id="users::42",
        )

        assert components.item_path == ["users", "42"]
        assert components.segments == ["data", "app1", "users", "42"]

    def test_segments_without_pool(self) -> None:
        components = KeyComponents(
            installation_id="0" * 32, item_namespace="lock", item_id="users"
        )
        assert components.segments == ["lock", "users"]

    def test_config_defaults(self) -> None:
        config = KeyGrammarConfig()

        assert config.separator == "::"
        assert config.item_namespaces == ("data", "lock")
        assert config.default_pool_namespace == "default"

    def test_config_namespaces_must_differ(self) -> None:
        with pytest.raises(ValidationError):
            KeyGrammarConfig(data_namespace="cache", lock_namespace="cache")

    def test_config_rejects_empty_separator(self) -> None:
        with pytest.raises(ValidationError):
            KeyGrammarConfig(separator="")
