"""Normalized records produced by cache inspection.

Every field that a backend does not report stays ``None``. Zero means the
backend reported zero; ``None`` means it reported nothing.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator

# Item ID -> whether a stampede lock marker was seen for it. Built fresh for
# every enumeration and discarded afterwards.
StampedeFlagSet = dict[str, bool]


class CacheItemRecord(BaseModel):
    """One entry observed in a cache backend.

    Timestamps are Unix epoch seconds as reported by the backend.
    """

    type: str | None = Field(default=None, description="Item namespace (data or lock)")
    key: str | None = Field(default=None, description="Raw backend key")
    formatted_key: str | None = Field(default=None, description="Human-readable key")
    value: Any = Field(default=None, description="Stored value, never deserialized further")
    creation_time: int | None = None
    modified_time: int | None = None
    deletion_time: int | None = None
    access_time: int | None = None
    expiration_time: int | None = None
    ttl: int | None = Field(default=None, description="Time-to-live in seconds")
    hits: int | None = Field(default=None, description="Number of reads")
    misses: int | None = None
    size: int | None = Field(default=None, description="Size in bytes")
    locked: bool | None = Field(
        default=None, description="Whether a stampede lock marker exists for this item"
    )

    @model_validator(mode="after")
    def derive_expiration_time(self) -> "CacheItemRecord":
        """Fill expiration_time from creation_time + ttl when both are known."""
        if (
            self.expiration_time is None
            and self.creation_time is not None
            and self.ttl is not None
        ):
            self.expiration_time = self.creation_time + self.ttl
        return self


class CacheSummary(BaseModel):
    """Aggregate statistics for a pool or a backend."""

    name: str
    translatable_name: str
    is_available: bool = False
    is_persistent: bool = False
    total_count: int | None = Field(default=None, ge=0, description="Number of items")
    total_hits: int | None = Field(default=None, ge=0, description="Number of cache hits")
    total_misses: int | None = Field(default=None, ge=0, description="Number of cache misses")
    total_size: int | None = Field(default=None, ge=0, description="Size in bytes")
