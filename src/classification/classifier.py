# src/classification/classifier.py - v2
"""Hybrid specialty classifier.

1. Lexicon scoring (KeywordScorer). Confidence above the threshold returns
   immediately with method="keyword"; the LLM is not called.
2. Otherwise the AI classifier is consulted. When it answers, its specialty
   wins and confidence = max(keyword, ai); method is "hybrid" when both
   sources contributed, "ai" when the lexicon matched nothing.
3. Without a usable AI answer the keyword decision is kept if anything
   matched, else general-practice at low confidence (method="fallback").

classify() never raises. Only decisive results are cached in the
classification region: a result produced while the AI was unavailable (or
the general-practice fallback) is recomputed on the next request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from medsite.cache.keys import Region, classification_key, normalize_text
from medsite.classification.keyword_scorer import KeywordScorer
from medsite.config.specialties import GENERAL_PRACTICE, lexicon_fingerprint
from medsite.core.errors import ClassificationError
from medsite.core.models import AISignal, ClassificationResult, KeywordSignal

if TYPE_CHECKING:
    from medsite.cache.generation_cache import GenerationCache
    from medsite.classification.ai_classifier import AISpecialtyClassifier

logger = logging.getLogger(__name__)


class SpecialtyClassifier:
    """Classify practice descriptions into a supported specialty."""

    def __init__(
        self,
        scorer: KeywordScorer | None = None,
        ai_classifier: AISpecialtyClassifier | None = None,
        cache: GenerationCache | None = None,
        confidence_threshold: float = 0.7,
        fallback_confidence: float = 0.3,
    ) -> None:
        self._scorer = scorer or KeywordScorer()
        self._ai = ai_classifier
        self._cache = cache
        self._threshold = confidence_threshold
        self._fallback_confidence = fallback_confidence
        self._lexicon_version = lexicon_fingerprint()

    async def classify(self, text: str) -> ClassificationResult:
        """Classify ``text``. Never raises."""
        try:
            return await self._classify_cached(text)
        except Exception:
            logger.exception("Specialty classification failed; using fallback")
            return self._fallback()

    async def _classify_cached(self, text: str) -> ClassificationResult:
        if not isinstance(text, str) or not normalize_text(text):
            return self._fallback()

        key = classification_key(text, self._lexicon_version)
        if self._cache is not None:
            cached = await self._cache.get(Region.CLASSIFICATION, key)
            if cached is not None:
                return ClassificationResult.model_validate(cached)

        result, decisive = await self._classify(text)
        if not decisive:
            logger.debug("Not caching degraded classification (%s)", result.method)
        elif self._cache is not None:
            await self._cache.set(Region.CLASSIFICATION, key, result.model_dump(mode="json"))
        return result

    async def _classify(self, text: str) -> tuple[ClassificationResult, bool]:
        """Decide the specialty and whether the decision may be cached."""
        keyword = self._scorer.score(text)

        if keyword is not None and keyword.confidence > self._threshold:
            logger.debug(
                "Keyword short-circuit: %s (%.2f)", keyword.specialty, keyword.confidence
            )
            result = ClassificationResult(
                specialty=keyword.specialty,
                confidence=keyword.confidence,
                method="keyword",
                signals=[keyword],
            )
            return result, True

        ai = await self._ask_ai(text)
        result = self.merge(keyword, ai)
        ai_missing = self._ai is not None and ai is None
        return result, not ai_missing and result.method != "fallback"

    async def _ask_ai(self, text: str) -> AISignal | None:
        if self._ai is None:
            return None
        try:
            return await self._ai.classify(text)
        except ClassificationError as exc:
            logger.warning("AI classifier unavailable: %s", exc)
            return None

    def merge(
        self, keyword: KeywordSignal | None, ai: AISignal | None
    ) -> ClassificationResult:
        """Blend the per-source signals into one decision."""
        if ai is not None:
            signals: list[KeywordSignal | AISignal] = [ai]
            confidence = ai.confidence
            method = "ai"
            if keyword is not None:
                signals.insert(0, keyword)
                confidence = max(keyword.confidence, ai.confidence)
                method = "hybrid"
            return ClassificationResult(
                specialty=ai.specialty,
                confidence=confidence,
                method=method,
                signals=signals,
            )

        if keyword is not None:
            return ClassificationResult(
                specialty=keyword.specialty,
                confidence=keyword.confidence,
                method="keyword",
                signals=[keyword],
            )

        return self._fallback()

    def _fallback(self) -> ClassificationResult:
        return ClassificationResult(
            specialty=GENERAL_PRACTICE,
            confidence=self._fallback_confidence,
            method="fallback",
        )
