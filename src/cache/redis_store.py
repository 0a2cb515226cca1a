# src/cache/redis_store.py - v3
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for multi-instance deployments. Each region gets its own key
prefix and index set, so clearing one region never touches another.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from medsite.cache.base_cache_store import BaseCacheStore
from medsite.cache.models import CacheEntry

logger = logging.getLogger(__name__)

_KEY_PREFIX = "medsite:cache:"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for distributed deployments."""

    def __init__(self, redis_url: str, namespace: str = "default", ttl_s: int = 0) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._prefix = f"{_KEY_PREFIX}{namespace}:"
        self._index_key = f"{self._prefix}__index__"
        self._ttl_s = ttl_s

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        data = self._client.get(f"{self._prefix}{key}")
        if data is None:
            # Expired by Redis; drop the stale index member
            self._client.srem(self._index_key, key)
            return None
        try:
            return CacheEntry(**json.loads(data))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry; expiry is delegated to Redis."""
        redis_key = f"{self._prefix}{key}"
        if self._ttl_s > 0:
            self._client.set(redis_key, entry.model_dump_json(), ex=self._ttl_s)
        else:
            self._client.set(redis_key, entry.model_dump_json())
        self._client.sadd(self._index_key, key)

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._client.delete(f"{self._prefix}{key}")
        self._client.srem(self._index_key, key)

    async def clear(self) -> None:
        for key in self._client.smembers(self._index_key):
            self._client.delete(f"{self._prefix}{key}")
        self._client.delete(self._index_key)

    async def size(self) -> int:
        """Count live entries, pruning index members Redis has expired."""
        self._prune_index()
        return int(self._client.scard(self._index_key))

    def _prune_index(self) -> None:
        stale = [
            key for key in self._client.smembers(self._index_key)
            if not self._client.exists(f"{self._prefix}{key}")
        ]
        if stale:
            self._client.srem(self._index_key, *stale)
            logger.debug("Pruned %d expired keys from %s", len(stale), self._index_key)

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
