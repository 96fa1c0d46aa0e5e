"""Fallback adapter for transient or unsupported backends."""

from cacheinfo.adapters.base import BackendAdapter


class GenericAdapter(BackendAdapter):
    """Reports a backend as unavailable, with no items and no counters."""

    def is_driver_supported(self) -> bool:
        return False
