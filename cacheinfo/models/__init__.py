"""Pydantic models for cache inspection."""

from cacheinfo.models.model_cache import CacheItemRecord, CacheSummary, StampedeFlagSet
from cacheinfo.models.model_config import KeyGrammarConfig
from cacheinfo.models.model_keys import ItemNamespace, KeyComponents

__all__ = [
    # Records
    "CacheItemRecord",
    "CacheSummary",
    "StampedeFlagSet",
    # Keys
    "ItemNamespace",
    "KeyComponents",
    # Configuration
    "KeyGrammarConfig",
]
