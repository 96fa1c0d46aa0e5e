"""Shared in-process memory store and the backend that writes to it.

The store keeps APCu-style metadata for every entry (hit count, creation,
modification and access times, TTL, size) and can enumerate its keyspace
through an iterator filtered by a regular expression.
"""

import hashlib
import logging
import re
import sys
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cacheinfo.backends.base import CacheBackend
from cacheinfo.consts import KEY_SEPARATOR

logger = logging.getLogger(__name__)

_DELIMITED_PATTERN = re.compile(r"^/(?P<body>.+)/(?P<flags>[imsx]*)$", re.DOTALL)
_PATTERN_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a plain or '/.../flags' delimited regular expression."""
    match = _DELIMITED_PATTERN.match(pattern)
    if match is None:
        return re.compile(pattern)

    flags = 0
    for flag in match.group("flags"):
        flags |= _PATTERN_FLAGS[flag]
    return re.compile(match.group("body"), flags)


@dataclass
class StoreEntry:
    """A stored value with its bookkeeping."""

    key: str
    value: Any
    ttl: int
    creation_time: int
    mtime: int
    access_time: int
    deletion_time: int = 0
    num_hits: int = 0
    ref_count: int = 0
    mem_size: int = 0

    def is_expired(self, now: int) -> bool:
        return self.ttl > 0 and now > self.creation_time + self.ttl

    def to_info(self) -> dict[str, Any]:
        """Entry as reported by the store iterator."""
        return {
            "type": "user",
            "key": self.key,
            "value": self.value,
            "num_hits": self.num_hits,
            "mtime": self.mtime,
            "creation_time": self.creation_time,
            "deletion_time": self.deletion_time,
            "access_time": self.access_time,
            "ref_count": self.ref_count,
            "mem_size": self.mem_size,
            "ttl": self.ttl,
        }


class MemoryStoreIterator:
    """Enumeration handle over the entries whose key matches a pattern.

    The handle snapshots the matching entries when created. Iterating it
    yields entry info dicts; the totals describe the same snapshot.
    """

    def __init__(self, entries: list[StoreEntry], pattern: re.Pattern[str]):
        self.pattern = pattern
        self._entries = [entry for entry in entries if pattern.search(entry.key)]

    def __iter__(self) -> Iterator[dict[str, Any]]:
        for entry in self._entries:
            yield entry.to_info()

    def total_count(self) -> int:
        return len(self._entries)

    def total_hits(self) -> int:
        return sum(entry.num_hits for entry in self._entries)

    def total_size(self) -> int:
        return sum(entry.mem_size for entry in self._entries)


class MemoryStore:
    """Process-local key-value store with per-entry metadata."""

    def __init__(self, clock: Callable[[], float] = time.time):
        """Initialize MemoryStore.

        Args:
            clock: Returns the current Unix time. Injected for tests.
        """
        self._entries: dict[str, StoreEntry] = {}
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def __len__(self) -> int:
        return len(self._entries)

    def store(self, key: str, value: Any, ttl: int = 0) -> bool:
        """Store a value, replacing any existing entry.

        Args:
            key: Full backend key.
            value: Value to store.
            ttl: Time-to-live in seconds. 0 means no expiration.

        Returns:
            True once stored.
        """
        now = self._now()
        self._entries[key] = StoreEntry(
            key=key,
            value=value,
            ttl=ttl,
            creation_time=now,
            mtime=now,
            access_time=now,
            mem_size=sys.getsizeof(value) + len(key.encode("utf-8")),
        )
        return True

    def fetch(self, key: str) -> Any | None:
        """Fetch a value, counting the hit. Expired entries are dropped."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        now = self._now()
        if entry.is_expired(now):
            logger.debug(f"Memory store entry expired: {key}")
            del self._entries[key]
            return None

        entry.num_hits += 1
        entry.access_time = now
        return entry.value

    def exists(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not entry.is_expired(self._now())

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def iterate(self, pattern: str) -> MemoryStoreIterator:
        """Create an enumeration handle over keys matching the pattern.

        Args:
            pattern: Regular expression, optionally delimited as '/.../flags'.
        """
        return MemoryStoreIterator(list(self._entries.values()), compile_pattern(pattern))


_shared_store = MemoryStore()


def shared_store() -> MemoryStore:
    """The store shared by every MemoryBackend created without one."""
    return _shared_store


def default_installation_id() -> str:
    """MD5 of this module's path, identifying the installation."""
    return hashlib.md5(str(Path(__file__).resolve()).encode("utf-8")).hexdigest()


class MemoryBackend(CacheBackend):
    """Backend writing to a shared, enumerable in-process store.

    Keys are laid out as 'installation_id::[namespace::]segment::segment...'.
    """

    def __init__(
        self,
        namespace: str | None = None,
        store: MemoryStore | None = None,
        installation_id: str | None = None,
    ):
        """Initialize MemoryBackend.

        Args:
            namespace: Application namespace separating this application's keys
                from other users of the same store.
            store: Store to write to. Defaults to the process-wide shared store.
            installation_id: 32-character hex installation ID. Defaults to
                default_installation_id().
        """
        self.namespace = namespace or None
        self.store = store if store is not None else shared_store()
        self.installation_id = installation_id or default_installation_id()

    def make_key(self, segments: list[str]) -> str:
        """Full store key for the given namespace segments."""
        prefix = [self.installation_id]
        if self.namespace:
            prefix.append(self.namespace)
        return KEY_SEPARATOR.join(prefix + list(segments))

    def is_persistent(self) -> bool:
        return True
