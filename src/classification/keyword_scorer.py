# src/classification/keyword_scorer.py - v1
"""Lexicon-based specialty scoring.

score = (occurrences / len(text)) * 1000 + (distinct matches / len(keywords)) * 100

The length-normalized frequency dominates; breadth of match is secondary.
Keywords match on word boundaries only, so "heart" never matches inside
"heartless".
"""

from __future__ import annotations

import re
from typing import Mapping

from medsite.cache.keys import normalize_text
from medsite.config.specialties import SPECIALTY_LEXICON
from medsite.core.models import KeywordSignal

FREQUENCY_WEIGHT = 1000.0
BREADTH_WEIGHT = 100.0


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    # Phrases match with any run of whitespace between words
    words = [re.escape(w) for w in keyword.lower().split()]
    return re.compile(r"\b" + r"\s+".join(words) + r"\b")


class KeywordScorer:
    """Scores text against every specialty of a lexicon."""

    def __init__(
        self,
        lexicon: Mapping[str, tuple[str, ...]] = SPECIALTY_LEXICON,
        confidence_scale: float = 50.0,
    ) -> None:
        self._lexicon = lexicon
        self._scale = confidence_scale
        self._patterns = {
            specialty: [(kw, _keyword_pattern(kw)) for kw in keywords]
            for specialty, keywords in lexicon.items()
        }

    def scores(self, text: str) -> dict[str, tuple[float, list[str]]]:
        """Per-specialty (score, matched keywords) for normalized ``text``."""
        result: dict[str, tuple[float, list[str]]] = {}
        length = len(text)
        for specialty, patterns in self._patterns.items():
            occurrences = 0
            matched: list[str] = []
            for keyword, pattern in patterns:
                hits = len(pattern.findall(text))
                if hits:
                    occurrences += hits
                    matched.append(keyword)
            if length == 0 or not patterns:
                score = 0.0
            else:
                score = (occurrences / length) * FREQUENCY_WEIGHT + (
                    len(matched) / len(patterns)
                ) * BREADTH_WEIGHT
            result[specialty] = (score, matched)
        return result

    def score(self, text: str) -> KeywordSignal | None:
        """Best specialty for ``text``, or None when no keyword matched.

        Ties keep the specialty that comes first in lexicon order.
        """
        normalized = normalize_text(text)
        if not normalized:
            return None
        per_specialty = self.scores(normalized)

        best: str | None = None
        best_score = 0.0
        for specialty, (value, _) in per_specialty.items():
            if value > best_score:
                best, best_score = specialty, value
        if best is None:
            return None

        return KeywordSignal(
            specialty=best,
            confidence=min(best_score / self._scale, 1.0),
            score=round(best_score, 4),
            matched_keywords=per_specialty[best][1],
            scores={s: round(v, 4) for s, (v, _) in per_specialty.items() if v > 0},
        )
