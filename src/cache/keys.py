# src/cache/keys.py - v1
"""Structured cache keys.

A key is the tuple (region, discriminant, specialty, content hash). The
content hash is the full SHA-256 of the complete normalized input, so two
inputs that share a long prefix never collide, and two different specialties
never share a key even for the same text.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

UNRESOLVED_SPECIALTY = "unresolved"


class Region(str, Enum):
    """Independent cache namespaces, one per pipeline stage."""

    CLASSIFICATION = "classification"
    CONTENT = "content"
    TEMPLATES = "templates"


@dataclass(frozen=True)
class CacheKey:
    """Structured key; equality is component-wise."""

    region: Region
    discriminant: str
    specialty: str
    content_hash: str

    def as_string(self) -> str:
        """Injective string form (each component percent-escaped)."""
        parts = (self.region.value, self.discriminant, self.specialty, self.content_hash)
        return "|".join(quote(p, safe="") for p in parts)

    def __str__(self) -> str:
        return self.as_string()


def normalize_text(text: str) -> str:
    """Lowercase, trim and collapse runs of whitespace."""
    return re.sub(r"\s+", " ", text.strip().lower())


def content_hash(text: str) -> str:
    """Full SHA-256 hex digest of ``text``."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def classification_key(text: str, lexicon_version: str) -> CacheKey:
    """Key for a classification result; specialty is not yet resolved."""
    return CacheKey(
        region=Region.CLASSIFICATION,
        discriminant=f"lexicon:{lexicon_version}",
        specialty=UNRESOLVED_SPECIALTY,
        content_hash=content_hash(normalize_text(text)),
    )


def content_key(
    text: str, specialty: str, template: str, nonce: str | None = None
) -> CacheKey:
    """Key for validated content.

    When ``nonce`` is given it is hashed together with the text, which makes
    the key unique to that request (a guaranteed miss).
    """
    payload = normalize_text(text)
    if nonce is not None:
        payload = f"{payload}\x00nonce:{nonce}"
    return CacheKey(
        region=Region.CONTENT,
        discriminant=f"template:{template}",
        specialty=specialty,
        content_hash=content_hash(payload),
    )


def template_key(source: str) -> CacheKey:
    """Key for a compiled template, addressed by the source text only."""
    return CacheKey(
        region=Region.TEMPLATES,
        discriminant="compiled",
        specialty="any",
        content_hash=content_hash(source),
    )
