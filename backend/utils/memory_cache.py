"""
In-memory TTL cache.

Thin wrapper over ``cachetools.TLRUCache`` used to avoid refetching YouTube
metadata. Each entry carries its own time-to-live; the wrapper adds a lock,
hit/miss statistics and glob-style invalidation.
"""

import fnmatch
import threading
import time
from typing import Any, Dict, NamedTuple, Optional

from cachetools import TLRUCache

from constants import CacheConfig


class _Entry(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(key, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class MemoryCache:
    """TTL cache with hit/miss statistics"""

    def __init__(
        self,
        default_ttl: int = CacheConfig.DEFAULT_TTL,
        maxsize: int = CacheConfig.MAX_ENTRIES,
        clock=time.monotonic,
    ):
        self._cache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=clock)
        self._lock = threading.Lock()
        self._default_ttl = default_ttl
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[int] = None):
        ttl = self._default_ttl if ttl is None else ttl
        with self._lock:
            self._cache[key] = _Entry(value, ttl)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._cache

    def invalidate_pattern(self, pattern: str) -> int:
        """
        Remove every key matching a glob pattern (e.g. ``video:*``).

        Returns:
            Number of entries removed
        """
        with self._lock:
            matched = [key for key in list(self._cache) if fnmatch.fnmatchcase(key, pattern)]
            for key in matched:
                self._cache.pop(key, None)
            return len(matched)

    def cleanup(self) -> int:
        """Drop expired entries and return how many were removed"""
        with self._lock:
            return len(self._cache.expire())

    def clear(self):
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "size": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hitRate": round(self._hits / lookups, 4) if lookups else 0.0,
            }
