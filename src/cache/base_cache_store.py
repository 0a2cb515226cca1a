# src/cache/base_cache_store.py - v2
"""Abstract cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from medsite.cache.models import CacheEntry


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends.

    Each store backs exactly one cache region. ``get`` and ``put`` are
    individually atomic; no operation spans several keys.
    """

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve a live (non-expired) entry by key."""

    @abstractmethod
    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a cache entry. Missing keys are ignored."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry. Idempotent."""

    @abstractmethod
    async def size(self) -> int:
        """Number of stored entries."""
