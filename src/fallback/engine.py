# src/fallback/engine.py - v1
"""Fallback engine: usable content without the AI.

Template tier: the specialty skeleton, personalized by scanning the raw text
for a closed set of indicator words and a location phrase. Pure string
substitution on a fresh skeleton, so the result depends only on
(raw_text, specialty) and repeated calls are identical.

Emergency tier: one static literal, used when no skeleton exists.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from medsite.core.errors import SkeletonNotFoundError
from medsite.core.models import WebsiteContent
from medsite.fallback.skeletons import emergency_content, template_skeleton
from medsite.validation.sanitize import sanitize_text, truncate

logger = logging.getLogger(__name__)

_EMERGENCY_RE = re.compile(r"\b(?:emergency|emergencies|urgent)\b", re.IGNORECASE)
_PEDIATRIC_RE = re.compile(r"\b(?:pediatric|children|kids)\b", re.IGNORECASE)
_SENIOR_RE = re.compile(r"\b(?:senior|seniors|elderly)\b", re.IGNORECASE)

_LOCATION_PATTERNS = (
    # "located in downtown austin, ..." (any case, stops at punctuation or a clause word)
    re.compile(
        r"\b(?:located|based)\s+in\s+([a-z][a-z .'-]{1,40}?)"
        r"(?=\s*[,.;:!?\n]|\s+(?:and|with|for|where|since|we|our|to)\b|\s*$)",
        re.IGNORECASE,
    ),
    # "in Springfield", "at Lakeside Plaza" (capitalized place names only)
    re.compile(r"\b(?:in|at)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+){0,2})\b"),
)
_NOT_PLACES = frozenset({
    "the", "and", "or", "but", "our", "my", "a", "an", "this", "that",
    "we", "i", "dr", "doctor", "medical", "general",
})


def extract_location(raw_text: str) -> str | None:
    """First plausible place name in ``raw_text``, title-cased."""
    for pattern in _LOCATION_PATTERNS:
        for match in pattern.finditer(raw_text):
            location = re.sub(r"\s+", " ", match.group(1)).strip(" .'-")
            first_word = location.split(" ", 1)[0].lower() if location else ""
            if len(location) > 2 and first_word not in _NOT_PLACES:
                return " ".join(w[:1].upper() + w[1:] for w in location.split(" "))
    return None


class FallbackEngine:
    """Produce fallback content in decreasing richness."""

    def fallback(self, raw_text: str, specialty: str) -> WebsiteContent:
        """Template-tier content, degrading to the emergency tier if needed."""
        try:
            return self.template_fallback(raw_text, specialty)
        except SkeletonNotFoundError as exc:
            logger.warning("%s; using emergency content", exc)
            return self.emergency_fallback(specialty)

    def template_fallback(self, raw_text: str, specialty: str) -> WebsiteContent:
        """Personalized specialty skeleton.

        Raises:
            SkeletonNotFoundError: No skeleton for ``specialty``.
        """
        content = template_skeleton(specialty)
        text = raw_text if isinstance(raw_text, str) else ""

        if _EMERGENCY_RE.search(text):
            content.hero.cta_text = "Emergency Consultation"
            content.contact.hours = "24/7 Emergency Care Available"
        if _PEDIATRIC_RE.search(text):
            content.tagline = "Specialized Care for Children"
        if _SENIOR_RE.search(text):
            content.tagline = "Comprehensive Care for Seniors"

        location = extract_location(sanitize_text(text))
        if location:
            content.contact.address = f"{location} Medical Center"
            content.seo.title = truncate(f"{content.title} - {location}", 60)

        logger.info("Template fallback used for %s", specialty)
        return content

    def emergency_fallback(self, specialty: str | None = None) -> WebsiteContent:
        logger.warning("Emergency fallback used for %s", specialty)
        return emergency_content(specialty)

    def section_fallback(self, section: str, specialty: str) -> Any:
        """Skeleton version of one section, as the generator would return it."""
        try:
            content = template_skeleton(specialty)
        except SkeletonNotFoundError:
            content = emergency_content(specialty)
        if section == "hero":
            return {
                "headline": content.hero.headline,
                "subheadline": content.hero.subheadline,
                "ctaText": content.hero.cta_text,
            }
        if section == "about":
            return content.about.model_dump()
        if section == "services":
            return [s.model_dump() for s in content.services]
        raise ValueError(f"Unknown section {section!r}")
