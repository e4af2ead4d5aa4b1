# File: app/services/cache.py

"""
In-process read-through cache.

Keys are tuples whose first element is a namespace, e.g. ("task", 42) or
("tasks", user_id, page, size). Writers evict what they touch; the service
behaves the same with the cache switched off (CACHE_ENABLED=false).

The cache holds at most `max_entries` values and drops the least recently
used one when full (CACHE_MAX_ENTRIES).
"""

import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Hashable, Tuple, TypeVar

from app.core.config import settings

log = logging.getLogger(__name__)

T = TypeVar("T")
CacheKey = Tuple[Hashable, ...]


class ReadThroughCache:
    def __init__(self, enabled: bool = True, max_entries: int = 1024):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.enabled = enabled
        self.max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, Any]" = OrderedDict()
        self._lock = threading.Lock()
        # bumped by every invalidation; a load that raced one is not stored
        self._generation = 0

    def get_or_load(self, key: CacheKey, loader: Callable[[], T]) -> T:
        if not self.enabled:
            return loader()
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                return self._entries[key]
            generation = self._generation
        # loader runs outside the lock; it may hit the database
        value = loader()
        with self._lock:
            if generation == self._generation:
                self._store(key, value)
        return value

    def put(self, key: CacheKey, value: Any) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._store(key, value)

    def _store(self, key: CacheKey, value: Any) -> None:
        # caller holds the lock
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def evict(self, key: CacheKey) -> None:
        with self._lock:
            self._generation += 1
            self._entries.pop(key, None)

    def evict_namespace(self, namespace: Hashable) -> None:
        with self._lock:
            self._generation += 1
            stale = [k for k in self._entries if k and k[0] == namespace]
            for k in stale:
                del self._entries[k]
        if stale:
            log.debug("Evicted %d cached entries from %r", len(stale), namespace)

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            self._entries.clear()

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


task_cache = ReadThroughCache(
    enabled=settings.cache_enabled,
    max_entries=settings.cache_max_entries,
)
