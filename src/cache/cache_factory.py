# src/cache/cache_factory.py - v3
"""Factory for the generation cache and its per-region stores."""

from __future__ import annotations

from medsite.cache.base_cache_store import BaseCacheStore
from medsite.cache.generation_cache import GenerationCache
from medsite.cache.keys import Region
from medsite.config.settings import Settings


def create_cache_store(
    settings: Settings | None = None, region: Region = Region.CONTENT
) -> BaseCacheStore:
    """Instantiate the configured backend for one region.

    Compiled templates hold parsed trees that are not serializable, so the
    templates region always lives in memory.

    Args:
        settings: Application settings. Defaults to the memory backend.
        region: Region the store will back (used as its namespace).

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend
    max_entries = 1000 if settings is None else settings.cache_max_entries

    if backend == "memory" or region is Region.TEMPLATES:
        from medsite.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore(max_entries=max_entries)

    if backend == "json":
        from medsite.cache.json_store import JsonCacheStore
        cache_root = "~/.medsite/cache" if settings is None else settings.cache_root
        return JsonCacheStore(cache_root=cache_root, namespace=region.value)

    if backend == "redis":
        from medsite.cache.redis_store import RedisCacheStore
        if settings is None or not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheStore(
            redis_url=settings.cache_redis_url,
            namespace=region.value,
            ttl_s=_ttl_for(settings, region),
        )

    raise ValueError(f"Unsupported cache backend: {backend!r}")


def create_generation_cache(settings: Settings | None = None) -> GenerationCache:
    """Build the three-region cache, one independent store per region."""
    stores = {region: create_cache_store(settings, region) for region in Region}
    ttls = {} if settings is None else {r: _ttl_for(settings, r) for r in Region}
    enabled = True if settings is None else settings.cache_enabled
    return GenerationCache(stores=stores, ttls=ttls, enabled=enabled)


def _ttl_for(settings: Settings, region: Region) -> int:
    return {
        Region.CLASSIFICATION: settings.cache_classification_ttl_s,
        Region.CONTENT: settings.cache_content_ttl_s,
        Region.TEMPLATES: settings.cache_templates_ttl_s,
    }[region]
