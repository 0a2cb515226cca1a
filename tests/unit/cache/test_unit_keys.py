# tests/unit/cache/test_unit_keys.py - v1
"""Tests for cache/keys.py - structured keys and their uniqueness."""

from __future__ import annotations

from medsite.cache.keys import (
    CacheKey,
    Region,
    classification_key,
    content_hash,
    content_key,
    normalize_text,
    template_key,
)


class TestNormalizeText:
    def test_collapses_whitespace_and_case(self):
        assert normalize_text("  Heart \n\t Care  ") == "heart care"


class TestContentKey:
    def test_same_text_different_specialty(self):
        a = content_key("We treat patients", "dentistry", "default")
        b = content_key("We treat patients", "cardiology", "default")
        assert a != b
        assert a.as_string() != b.as_string()

    def test_distinct_inputs_never_share_key(self):
        a = content_key("teeth and dentistry", "dentistry", "default")
        b = content_key("heart and cardiology", "cardiology", "default")
        assert a != b
        assert a.content_hash != b.content_hash

    def test_long_shared_prefix(self):
        prefix = "x" * 500
        a = content_key(prefix + " dentistry", "general-practice", "default")
        b = content_key(prefix + " cardiology", "general-practice", "default")
        assert a != b

    def test_full_sha256(self):
        key = content_key("abc", "dentistry", "default")
        assert len(key.content_hash) == 64
        assert key.content_hash == content_hash("abc")

    def test_whitespace_variants_share_key(self):
        a = content_key("Teeth  cleaning", "dentistry", "default")
        b = content_key("teeth cleaning ", "dentistry", "default")
        assert a == b

    def test_template_is_discriminant(self):
        a = content_key("text", "dentistry", "default")
        b = content_key("text", "dentistry", "compact")
        assert a != b

    def test_nonce_makes_key_unique(self):
        plain = content_key("text", "dentistry", "default")
        fresh = content_key("text", "dentistry", "default", nonce="n1")
        other = content_key("text", "dentistry", "default", nonce="n2")
        assert len({plain, fresh, other}) == 3


class TestOtherKeys:
    def test_classification_key_unresolved_specialty(self):
        key = classification_key("text", "v1")
        assert key.region is Region.CLASSIFICATION
        assert key.specialty == "unresolved"

    def test_classification_key_versioned(self):
        assert classification_key("text", "v1") != classification_key("text", "v2")

    def test_template_key_by_source(self):
        assert template_key("<p>{{a}}</p>") == template_key("<p>{{a}}</p>")
        assert template_key("<p>{{a}}</p>") != template_key("<p>{{b}}</p>")


class TestAsString:
    def test_separator_is_escaped(self):
        a = CacheKey(Region.CONTENT, "template:a|b", "x", "h")
        b = CacheKey(Region.CONTENT, "template:a", "b|x", "h")
        assert a.as_string() != b.as_string()

    def test_str(self):
        key = template_key("src")
        assert str(key) == key.as_string()
        assert str(key).startswith("templates|compiled|any|")
