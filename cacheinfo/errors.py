"""Exceptions raised while inspecting cache backends.

Structural and configuration problems are raised to the caller and never
retried. Gaps in the data a backend reports (missing counters, keys that do
not decode) are not errors; they surface as ``None`` values instead.
"""


class CacheInfoError(Exception):
    """Base class for all cache inspection errors."""


class BackendUnavailable(CacheInfoError, RuntimeError):
    """A capability the adapter needs is missing from the backend runtime."""


class EmptyAggregate(CacheInfoError, RuntimeError):
    """A composite backend has no child backends."""


class InvalidKeySegment(CacheInfoError, ValueError):
    """A cache key segment is empty or otherwise unusable."""


class UnsupportedBackend(CacheInfoError, ValueError):
    """No adapter is registered for a backend (strict resolution only)."""


class InvalidSearchQuery(CacheInfoError, TypeError):
    """A search query is neither a key, a list of keys, nor None."""


class BackendQueryError(CacheInfoError):
    """The client library behind a backend failed to answer a stats query."""
