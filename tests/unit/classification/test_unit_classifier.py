# tests/unit/classification/test_unit_classifier.py - v2
"""Tests for classification/classifier.py - hybrid decision rules."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from medsite.cache.keys import Region, classification_key, content_key
from medsite.classification.classifier import SpecialtyClassifier
from medsite.config.specialties import lexicon_fingerprint
from medsite.core.errors import ClassificationError
from medsite.core.models import AISignal, KeywordSignal

WEAK_HEART = "Our clinic sees many patients who come in with heart concerns every week of the year."


def _ai(signal: AISignal | None = None, side_effect=None) -> AsyncMock:
    ai = AsyncMock()
    ai.classify = AsyncMock(return_value=signal, side_effect=side_effect)
    return ai


class TestShortCircuit:
    @pytest.mark.asyncio
    async def test_strong_keyword_skips_ai(self):
        ai = _ai(AISignal(specialty="dermatology", confidence=0.9))
        result = await SpecialtyClassifier(ai_classifier=ai).classify("heart")
        assert result.specialty == "cardiology"
        assert result.method == "keyword"
        assert result.confidence == 1.0
        ai.classify.assert_not_awaited()


class TestHybrid:
    @pytest.mark.asyncio
    async def test_ai_wins_specialty_max_confidence(self):
        ai = _ai(AISignal(specialty="cardiology", confidence=0.85))
        result = await SpecialtyClassifier(ai_classifier=ai).classify(WEAK_HEART)
        assert result.method == "hybrid"
        assert result.specialty == "cardiology"
        assert result.confidence == 0.85
        assert result.signal("keyword") is not None
        assert result.signal("ai").confidence == 0.85

    @pytest.mark.asyncio
    async def test_keyword_confidence_kept_when_higher(self):
        ai = _ai(AISignal(specialty="neurology", confidence=0.1))
        result = await SpecialtyClassifier(ai_classifier=ai).classify(WEAK_HEART)
        assert result.specialty == "neurology"
        assert result.confidence == pytest.approx(result.signal("keyword").confidence)

    @pytest.mark.asyncio
    async def test_ai_only(self):
        ai = _ai(AISignal(specialty="psychiatry", confidence=0.75))
        result = await SpecialtyClassifier(ai_classifier=ai).classify(
            "We help people feel better every single day."
        )
        assert result.method == "ai"
        assert result.specialty == "psychiatry"
        assert result.signal("keyword") is None


class TestDegradation:
    @pytest.mark.asyncio
    async def test_ai_failure_keeps_keyword(self):
        ai = _ai(side_effect=ClassificationError("down"))
        result = await SpecialtyClassifier(ai_classifier=ai).classify(WEAK_HEART)
        assert result.method == "keyword"
        assert result.specialty == "cardiology"

    @pytest.mark.asyncio
    async def test_nothing_matched_falls_back(self):
        ai = _ai(None)
        result = await SpecialtyClassifier(ai_classifier=ai).classify(
            "We are open on weekends and love our community."
        )
        assert result.method == "fallback"
        assert result.specialty == "general-practice"
        assert result.confidence == 0.3

    @pytest.mark.asyncio
    async def test_unexpected_error_never_raises(self):
        ai = _ai(side_effect=RuntimeError("bug"))
        result = await SpecialtyClassifier(ai_classifier=ai).classify(WEAK_HEART)
        assert result.method == "fallback"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None, 42])
    async def test_empty_or_non_text(self, text):
        result = await SpecialtyClassifier().classify(text)
        assert result.method == "fallback"
        assert result.specialty == "general-practice"

    @pytest.mark.asyncio
    async def test_no_ai_configured(self):
        result = await SpecialtyClassifier().classify(WEAK_HEART)
        assert result.method == "keyword"


class TestCaching:
    @pytest.mark.asyncio
    async def test_second_call_hits_cache(self, cache):
        ai = _ai(AISignal(specialty="cardiology", confidence=0.85))
        classifier = SpecialtyClassifier(ai_classifier=ai, cache=cache)
        first = await classifier.classify(WEAK_HEART)
        second = await classifier.classify(WEAK_HEART.upper())
        assert first == second
        assert ai.classify.await_count == 1

    @pytest.mark.asyncio
    async def test_ai_outage_result_not_cached(self, cache):
        text = "We help people feel better every single day."
        ai = _ai(side_effect=[
            ClassificationError("down"),
            AISignal(specialty="psychiatry", confidence=0.9),
        ])
        classifier = SpecialtyClassifier(ai_classifier=ai, cache=cache)

        first = await classifier.classify(text)
        assert first.method == "fallback"
        assert (await cache.stats()).size_per_region["classification"] == 0

        second = await classifier.classify(text)
        assert second.specialty == "psychiatry"
        assert second.method == "ai"
        assert ai.classify.await_count == 2
        assert (await cache.stats()).size_per_region["classification"] == 1

    @pytest.mark.asyncio
    async def test_keyword_result_during_outage_not_cached(self, cache):
        ai = _ai(side_effect=ClassificationError("down"))
        classifier = SpecialtyClassifier(ai_classifier=ai, cache=cache)
        await classifier.classify(WEAK_HEART)
        await classifier.classify(WEAK_HEART)
        assert ai.classify.await_count == 2

    @pytest.mark.asyncio
    async def test_unusable_ai_answer_not_cached(self, cache):
        ai = _ai(None)
        classifier = SpecialtyClassifier(ai_classifier=ai, cache=cache)
        await classifier.classify(WEAK_HEART)
        assert (await cache.stats()).size_per_region["classification"] == 0

    @pytest.mark.asyncio
    async def test_keyword_only_classifier_caches(self, cache):
        classifier = SpecialtyClassifier(cache=cache)
        result = await classifier.classify(WEAK_HEART)
        assert result.method == "keyword"
        assert (await cache.stats()).size_per_region["classification"] == 1


class TestCacheKeyUniqueness:
    @pytest.mark.asyncio
    async def test_distinct_texts_get_distinct_entries(self, cache):
        classifier = SpecialtyClassifier(cache=cache)
        version = lexicon_fingerprint()
        dental_key = classification_key("teeth and dentistry", version)
        heart_key = classification_key("heart and cardiology", version)
        assert dental_key != heart_key
        assert dental_key.as_string() != heart_key.as_string()

        dental = await classifier.classify("teeth and dentistry")
        heart = await classifier.classify("heart and cardiology")
        assert dental.specialty == "dentistry"
        assert heart.specialty == "cardiology"

        cached_dental = await cache.get(Region.CLASSIFICATION, dental_key)
        cached_heart = await cache.get(Region.CLASSIFICATION, heart_key)
        assert cached_dental["specialty"] == "dentistry"
        assert cached_heart["specialty"] == "cardiology"

        # A repeat of the first text is answered from its own entry
        again = await classifier.classify("teeth and dentistry")
        assert again == dental

    @pytest.mark.asyncio
    async def test_clearing_other_region_keeps_entry(self, cache):
        classifier = SpecialtyClassifier(cache=cache)
        third = "bone fracture and joint care"
        third_key = classification_key(third, lexicon_fingerprint())
        await classifier.classify(third)

        content = content_key("teeth and dentistry", "dentistry", "default")
        await cache.set(Region.CONTENT, content, {"title": "x"})

        await cache.clear(Region.CONTENT)
        assert await cache.get(Region.CONTENT, content) is None
        cached = await cache.get(Region.CLASSIFICATION, third_key)
        assert cached is not None
        assert cached["specialty"] == "orthopedics"

        await cache.clear(Region.CLASSIFICATION)
        assert await cache.get(Region.CLASSIFICATION, third_key) is None


class TestMerge:
    def test_none_none(self):
        result = SpecialtyClassifier(fallback_confidence=0.2).merge(None, None)
        assert result.method == "fallback"
        assert result.confidence == 0.2

    def test_keyword_only(self):
        kw = KeywordSignal(specialty="oncology", confidence=0.5)
        result = SpecialtyClassifier().merge(kw, None)
        assert result.specialty == "oncology"
        assert result.signals == [kw]
