# src/cache/json_store.py - v2
"""JSON file-based cache store (CACHE_BACKEND=json).

Stores one JSON file per entry under CACHE_ROOT/<namespace>. Lets CLI runs
reuse classifications and content across processes.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from medsite.cache.base_cache_store import BaseCacheStore
from medsite.cache.models import CacheEntry

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(self, cache_root: Path | str, namespace: str = "default") -> None:
        self._root = Path(cache_root).expanduser() / namespace
        self._root.mkdir(parents=True, exist_ok=True)

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        path = self._entry_path(key)
        if not path.exists():
            return None
        try:
            entry = CacheEntry(**json.loads(path.read_text(encoding="utf-8")))
        except FileNotFoundError:
            # Removed by a concurrent clear()
            return None
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Failed to read cache entry %s: %s", key, e)
            return None
        if entry.is_expired():
            await self.delete(key)
            return None
        return entry

    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry (write-then-rename, so readers never see partial files)."""
        path = self._entry_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(f".{os.getpid()}.tmp")
        tmp.write_text(entry.model_dump_json(), encoding="utf-8")
        os.replace(tmp, path)

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._entry_path(key).unlink(missing_ok=True)

    async def clear(self) -> None:
        if not self._root.is_dir():
            return
        for path in self._root.glob("*.json"):
            path.unlink(missing_ok=True)

    async def size(self) -> int:
        if not self._root.is_dir():
            return 0
        return sum(1 for _ in self._root.glob("*.json"))

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        safe_key = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self._root / f"{safe_key}.json"
