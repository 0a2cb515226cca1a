# src/pipeline/recommendations.py - v1
"""Post-generation advice and the section view consumed by front-ends."""

from __future__ import annotations

from typing import Any

from medsite.core.models import ClassificationResult, Recommendation, WebsiteContent

QUALITY_TARGET = 0.8
CONFIDENCE_TARGET = 0.7
MIN_SERVICES = 4
MIN_KEYWORDS = 5


def build_recommendations(
    content: WebsiteContent, classification: ClassificationResult
) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    if content.quality_score < QUALITY_TARGET:
        recommendations.append(Recommendation(
            type="content_quality",
            priority="high",
            message="Consider providing more detailed information about your practice "
                    "to improve content quality.",
            action="regenerate",
        ))
    if classification.confidence < CONFIDENCE_TARGET:
        recommendations.append(Recommendation(
            type="specialty_detection",
            priority="medium",
            message="The detected medical specialty has low confidence. "
                    "Consider specifying your specialty explicitly.",
            action="specify-specialty",
        ))
    if len(content.services) < MIN_SERVICES:
        recommendations.append(Recommendation(
            type="services",
            priority="medium",
            message="Adding more services can improve your website's comprehensiveness.",
            action="add-services",
        ))
    if len(content.seo.keywords) < MIN_KEYWORDS:
        recommendations.append(Recommendation(
            type="seo",
            priority="low",
            message="More SEO keywords can help patients find your practice online.",
            action="optimize-seo",
        ))
    return recommendations


def extract_sections(content: WebsiteContent, year: int) -> dict[str, Any]:
    return {
        "header": {
            "title": content.title,
            "tagline": content.tagline,
            "navigation": ["Home", "About", "Services", "Contact"],
        },
        "hero": content.hero.model_dump(),
        "about": content.about.model_dump(),
        "services": {
            "title": "Our Services",
            "items": [s.model_dump() for s in content.services],
        },
        "contact": {"title": "Contact Us", "info": content.contact.model_dump()},
        "footer": {
            "copyright": f"© {year} {content.title}. All rights reserved.",
            "links": ["Privacy Policy", "Terms of Service", "Sitemap"],
        },
    }
