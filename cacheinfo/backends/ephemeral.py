"""Per-instance dictionary backend. Nothing outlives the instance."""

from typing import Any

from cacheinfo.backends.base import CacheBackend


class EphemeralBackend(CacheBackend):
    """Transient backend holding values in a plain dict."""

    def __init__(self) -> None:
        self.entries: dict[str, Any] = {}

    def is_persistent(self) -> bool:
        return False
