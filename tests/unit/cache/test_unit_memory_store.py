# tests/unit/cache/test_unit_memory_store.py - v1
"""Tests for cache/memory_store.py - LRU bound and expiry."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from medsite.cache.memory_store import MemoryCacheStore
from medsite.cache.models import CacheEntry


def _entry(key: str, value: object = "v", ttl_s: int | None = None) -> CacheEntry:
    now = datetime.now(timezone.utc)
    return CacheEntry(
        key=key,
        value=value,
        created_at=now,
        expires_at=now + timedelta(seconds=ttl_s) if ttl_s is not None else None,
    )


class TestMemoryCacheStore:
    @pytest.mark.asyncio
    async def test_put_get(self):
        store = MemoryCacheStore()
        await store.put("a", _entry("a", 1))
        entry = await store.get("a")
        assert entry is not None
        assert entry.value == 1

    @pytest.mark.asyncio
    async def test_lru_eviction(self):
        store = MemoryCacheStore(max_entries=2)
        await store.put("a", _entry("a"))
        await store.put("b", _entry("b"))
        await store.get("a")  # a is now most recent
        await store.put("c", _entry("c"))

        assert await store.get("a") is not None
        assert await store.get("b") is None
        assert await store.size() == 2

    @pytest.mark.asyncio
    async def test_expired_entry_dropped(self):
        store = MemoryCacheStore()
        await store.put("a", _entry("a", ttl_s=-1))
        assert await store.get("a") is None
        assert await store.size() == 0

    @pytest.mark.asyncio
    async def test_delete_missing_key(self):
        store = MemoryCacheStore()
        await store.delete("nope")
        assert await store.size() == 0

    @pytest.mark.asyncio
    async def test_clear(self):
        store = MemoryCacheStore()
        await store.put("a", _entry("a"))
        await store.clear()
        assert await store.get("a") is None
