# src/cache/memory_store.py - v1
"""In-process cache store (default CACHE_BACKEND=memory).

Bounded LRU with per-entry expiry. A plain lock guards the dict; it is never
held across an await, so concurrent coroutines and threads only ever see
whole entries.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from medsite.cache.base_cache_store import BaseCacheStore
from medsite.cache.models import CacheEntry

logger = logging.getLogger(__name__)


class MemoryCacheStore(BaseCacheStore):
    """Thread-safe LRU cache held in memory."""

    def __init__(self, max_entries: int = 1000) -> None:
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._max_entries = max_entries
        self._lock = threading.Lock()

    async def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired():
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return entry

    async def put(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cache entry %s", evicted)

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    async def size(self) -> int:
        with self._lock:
            return len(self._entries)
