"""Tests for the driver registry."""

import pytest

from cacheinfo.backends.base import CacheBackend
from cacheinfo.backends.composite import CompositeBackend
from cacheinfo.backends.ephemeral import EphemeralBackend
from cacheinfo.backends.memory import MemoryBackend
from cacheinfo.backends.registry import DEFAULT_DRIVERS, DriverRegistry


class UnavailableBackend(CacheBackend):
    @classmethod
    def is_available(cls) -> bool:
        return False

    def is_persistent(self) -> bool:
        return True


class TestDriverRegistry:
    """Tests for DriverRegistry."""

    def test_defaults(self) -> None:
        registry = DriverRegistry()

        assert set(registry.all_drivers()) == {
            "memory",
            "ephemeral",
            "memcache",
            "redis",
            "composite",
        }
        assert registry.get_driver_class("memory") is MemoryBackend
        assert registry.get_driver_class("missing") is None

    def test_all_drivers_is_a_copy(self) -> None:
        registry = DriverRegistry()
        registry.all_drivers().clear()

        assert registry.all_drivers() == DEFAULT_DRIVERS

    def test_register(self) -> None:
        registry = DriverRegistry()
        registry.register("unavailable", UnavailableBackend)

        assert registry.get_driver_class("unavailable") is UnavailableBackend

    def test_register_duplicate(self) -> None:
        with pytest.raises(ValueError, match="already registered"):
            DriverRegistry().register("memory", EphemeralBackend)

    def test_register_rejects_non_backends(self) -> None:
        with pytest.raises(TypeError):
            DriverRegistry().register("dict", dict)  # type: ignore[arg-type]

    def test_available_drivers(self) -> None:
        registry = DriverRegistry({"unavailable": UnavailableBackend, "composite": CompositeBackend})

        available = registry.available_drivers()

        assert "unavailable" not in available
        assert available["composite"] is CompositeBackend

    def test_composite_always_available(self) -> None:
        class UnavailableComposite(CompositeBackend):
            @classmethod
            def is_available(cls) -> bool:
                return False

        registry = DriverRegistry({"composite": UnavailableComposite})
        assert "composite" in registry.available_drivers()

    def test_name_for(self, memory_backend: MemoryBackend) -> None:
        registry = DriverRegistry()

        assert registry.name_for(memory_backend) == "memory"
        assert registry.name_for(UnavailableBackend()) is None

    def test_resolve_name_falls_back_to_class_name(self) -> None:
        assert DriverRegistry().resolve_name(UnavailableBackend()) == "UnavailableBackend"
