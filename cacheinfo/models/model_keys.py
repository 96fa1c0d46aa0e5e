"""Decoded structure of string cache keys."""

from enum import Enum

from pydantic import BaseModel, Field

from cacheinfo.consts import ITEM_DATA_NAMESPACE, ITEM_LOCK_NAMESPACE, KEY_SEPARATOR


class ItemNamespace(str, Enum):
    """Classification of an entry within a pool's keyspace."""

    DATA = ITEM_DATA_NAMESPACE
    LOCK = ITEM_LOCK_NAMESPACE


class KeyComponents(BaseModel):
    """Components of a key matching the grammar:

        installation_id "::" [application_namespace "::"] item_namespace "::"
        [pool_namespace "::"] item_id
    """

    installation_id: str = Field(description="Backend installation identifier (32 hex chars)")
    application_namespace: str | None = Field(default=None)
    item_namespace: str = Field(description="Data or lock")
    pool_namespace: str | None = Field(default=None)
    item_id: str = Field(description="User-visible key path")
    separator: str = Field(
        default=KEY_SEPARATOR, exclude=True, description="Separator the key was decoded with"
    )

    @property
    def item_path(self) -> list[str]:
        """Path nodes of the item ID."""
        return [node for node in self.item_id.split(self.separator) if node]

    @property
    def segments(self) -> list[str]:
        """Namespace segments in the order they were composed."""
        segments = [self.item_namespace]
        if self.pool_namespace:
            segments.append(self.pool_namespace)
        segments.extend(self.item_path)
        return segments
