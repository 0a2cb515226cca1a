# src/cache/generation_cache.py - v1
"""Three-region generation cache.

Built once per process (see cache_factory) and injected into every component
that caches. Regions are independent stores; a key built for one region is
rejected by the others.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from medsite.cache.base_cache_store import BaseCacheStore
from medsite.cache.keys import CacheKey, Region
from medsite.cache.models import CacheEntry, CacheStats

logger = logging.getLogger(__name__)


class GenerationCache:
    """Region-partitioned cache for classification, content and templates."""

    def __init__(
        self,
        stores: Mapping[Region, BaseCacheStore],
        ttls: Mapping[Region, int] | None = None,
        enabled: bool = True,
    ) -> None:
        missing = [r.value for r in Region if r not in stores]
        if missing:
            raise ValueError(f"Missing cache store for region(s): {', '.join(missing)}")
        if len({id(s) for s in stores.values()}) != len(stores):
            raise ValueError("Each cache region needs its own store instance")
        self._stores = dict(stores)
        self._ttls = dict(ttls or {})
        self._enabled = enabled
        self._hits: Counter[str] = Counter()
        self._misses: Counter[str] = Counter()
        self._counter_lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def get(self, region: Region, key: CacheKey) -> Any | None:
        """Return the cached value, or None on a miss."""
        self._check_region(region, key)
        if not self._enabled:
            return None
        entry = await self._stores[region].get(key.as_string())
        with self._counter_lock:
            if entry is None:
                self._misses[region.value] += 1
            else:
                self._hits[region.value] += 1
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None
        logger.debug("Cache hit: %s", key)
        return entry.value

    async def set(self, region: Region, key: CacheKey, value: Any) -> None:
        self._check_region(region, key)
        if not self._enabled:
            return
        ttl = self._ttls.get(region, 0)
        now = datetime.now(timezone.utc)
        entry = CacheEntry(
            key=key.as_string(),
            value=value,
            created_at=now,
            expires_at=now + timedelta(seconds=ttl) if ttl > 0 else None,
        )
        await self._stores[region].put(key.as_string(), entry)

    async def delete(self, region: Region, key: CacheKey) -> None:
        self._check_region(region, key)
        await self._stores[region].delete(key.as_string())

    async def clear(self, region: Region | None = None) -> None:
        """Clear one region, or every region when ``region`` is None."""
        targets = [region] if region is not None else list(Region)
        for target in targets:
            await self._stores[target].clear()
            logger.info("Cleared cache region %s", target.value)

    async def stats(self) -> CacheStats:
        sizes = {r.value: await self._stores[r].size() for r in Region}
        with self._counter_lock:
            hits = {r.value: self._hits[r.value] for r in Region}
            misses = {r.value: self._misses[r.value] for r in Region}
        return CacheStats(size_per_region=sizes, hits=hits, misses=misses)

    @staticmethod
    def _check_region(region: Region, key: CacheKey) -> None:
        if key.region is not region:
            raise ValueError(
                f"Cache key for region {key.region.value!r} used with region {region.value!r}"
            )
