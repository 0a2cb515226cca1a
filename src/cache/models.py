# src/cache/models.py - v2
"""Cache domain models: CacheEntry, CacheStats."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class CacheEntry(BaseModel):
    """Single cached value."""

    key: str
    value: Any
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class CacheStats(BaseModel):
    """Operational snapshot of the generation cache."""

    size_per_region: dict[str, int] = Field(default_factory=dict)
    hits: dict[str, int] = Field(default_factory=dict)
    misses: dict[str, int] = Field(default_factory=dict)

    @property
    def total_size(self) -> int:
        return sum(self.size_per_region.values())
