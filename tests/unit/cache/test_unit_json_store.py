# tests/unit/cache/test_unit_json_store.py - v1
"""Tests for cache/json_store.py - file-per-entry persistence."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from medsite.cache.json_store import JsonCacheStore
from medsite.cache.models import CacheEntry


def _entry(key: str, value: object, expired: bool = False) -> CacheEntry:
    now = datetime.now(timezone.utc)
    return CacheEntry(
        key=key,
        value=value,
        created_at=now,
        expires_at=now - timedelta(seconds=1) if expired else None,
    )


class TestJsonCacheStore:
    @pytest.mark.asyncio
    async def test_put_and_get(self, tmp_path):
        store = JsonCacheStore(tmp_path, namespace="content")
        await store.put("content|k", _entry("content|k", {"title": "Bright Smile"}))
        entry = await store.get("content|k")
        assert entry is not None
        assert entry.value == {"title": "Bright Smile"}

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_path):
        await JsonCacheStore(tmp_path, "content").put("k", _entry("k", [1, 2]))
        entry = await JsonCacheStore(tmp_path, "content").get("k")
        assert entry is not None and entry.value == [1, 2]

    @pytest.mark.asyncio
    async def test_namespaces_isolated(self, tmp_path):
        await JsonCacheStore(tmp_path, "content").put("k", _entry("k", 1))
        assert await JsonCacheStore(tmp_path, "classification").get("k") is None

    @pytest.mark.asyncio
    async def test_corrupt_file_is_a_miss(self, tmp_path):
        store = JsonCacheStore(tmp_path, "content")
        await store.put("k", _entry("k", 1))
        store._entry_path("k").write_text("{not json", encoding="utf-8")
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_expired_entry_removed(self, tmp_path):
        store = JsonCacheStore(tmp_path, "content")
        await store.put("k", _entry("k", 1, expired=True))
        assert await store.get("k") is None
        assert await store.size() == 0

    @pytest.mark.asyncio
    async def test_clear_and_size(self, tmp_path):
        store = JsonCacheStore(tmp_path, "content")
        await store.put("a", _entry("a", 1))
        await store.put("b", _entry("b", 2))
        assert await store.size() == 2
        await store.clear()
        assert await store.size() == 0
