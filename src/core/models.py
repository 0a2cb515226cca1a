# src/core/models.py - v2
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

import secrets
import time
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# === CLASSIFICATION ===


class KeywordSignal(BaseModel):
    """Evidence contributed by the lexicon scorer."""

    source: Literal["keyword"] = "keyword"
    specialty: str
    confidence: float = Field(ge=0.0, le=1.0)
    score: float = 0.0
    matched_keywords: list[str] = Field(default_factory=list)
    scores: dict[str, float] = Field(default_factory=dict)


class AISignal(BaseModel):
    """Evidence contributed by the LLM classifier."""

    source: Literal["ai"] = "ai"
    specialty: str
    confidence: float = Field(ge=0.0, le=1.0)
    rationale: str = ""
    parse_mode: Literal["json", "regex"] = "json"


ClassificationSignal = Annotated[
    Union[KeywordSignal, AISignal], Field(discriminator="source")
]


class ClassificationResult(BaseModel):
    """Blended specialty decision plus the per-source signals it was derived from.

    ``specialty`` and ``confidence`` are the derived decision; ``signals``
    keeps each contributing source separately so provenance is never
    inferred from ``method`` alone.
    """

    specialty: str
    confidence: float = Field(ge=0.0, le=1.0)
    method: Literal["keyword", "ai", "hybrid", "fallback", "provided"]
    signals: list[ClassificationSignal] = Field(default_factory=list)

    def signal(self, source: Literal["keyword", "ai"]) -> KeywordSignal | AISignal | None:
        """Return the signal contributed by ``source``, if any."""
        for sig in self.signals:
            if sig.source == source:
                return sig
        return None


# === GENERATION ===


def _new_nonce() -> str:
    return f"{time.time_ns()}-{secrets.token_hex(8)}"


class GenerationRequest(BaseModel):
    """Input of a content generation.

    The nonce only participates in the cache key when fresh content is
    explicitly requested.
    """

    raw_text: str
    specialty: str
    template: str = "default"
    request_nonce: str = Field(default_factory=_new_nonce)

    def content_key(self, fresh: bool = False):
        """Cache key for the content region."""
        from medsite.cache.keys import content_key

        return content_key(
            self.raw_text,
            self.specialty,
            self.template,
            nonce=self.request_nonce if fresh else None,
        )


# === WEBSITE CONTENT ===


class HeroSection(BaseModel):
    headline: str = Field(min_length=1)
    subheadline: str = Field(min_length=1)
    cta_text: str = Field(min_length=1)


class AboutSection(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=100)
    highlights: list[str] = Field(min_length=1)


class Service(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str = "medical-icon"


class ContactInfo(BaseModel):
    phone: str = Field(min_length=1)
    email: str = Field(min_length=1)
    address: str = Field(min_length=1)
    hours: str = Field(min_length=1)


class SeoMeta(BaseModel):
    title: str = Field(min_length=10, max_length=60)
    description: str = Field(min_length=50, max_length=160)
    keywords: list[str] = Field(min_length=3, max_length=15)


class WebsiteContent(BaseModel):
    """Canonical structured content of a practice website.

    Field constraints encode the structural contract; an instance that
    violates it cannot be constructed.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str = Field(min_length=10, max_length=100)
    tagline: str = Field(min_length=1)
    hero: HeroSection
    about: AboutSection
    services: list[Service] = Field(min_length=3, max_length=10)
    contact: ContactInfo
    seo: SeoMeta
    specialty: str
    quality_score: float = Field(ge=0.0, le=1.0)
    fallback_used: bool = False
    content_features: set[str] = Field(default_factory=set)
    generation_method: Literal["ai", "template_fallback", "emergency_fallback"] = "ai"


# === CUSTOMIZATION & STYLE ===


class ColorOverrides(BaseModel):
    primary: str | None = None
    secondary: str | None = None
    accent: str | None = None
    background: str | None = None
    text: str | None = None


class FontSettings(BaseModel):
    heading_font: str = "Inter"
    body_font: str = "Inter"
    font_size: Literal["small", "medium", "large"] = "medium"


class LayoutSettings(BaseModel):
    header_style: Literal["fixed", "static", "transparent"] = "fixed"
    footer_style: Literal["simple", "detailed", "minimal"] = "detailed"
    sidebar_enabled: bool = False


class FeatureFlags(BaseModel):
    appointment_booking: bool = True
    live_chat: bool = False
    testimonials: bool = True
    blog: bool = False
    newsletter: bool = False


class Customizations(BaseModel):
    """Caller-supplied presentation choices, already validated."""

    colors: ColorOverrides = Field(default_factory=ColorOverrides)
    fonts: FontSettings = Field(default_factory=FontSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    theme: Literal["modern", "classic", "minimal", "professional"] = "professional"


class StyleData(BaseModel):
    """Resolved styling fed to templates alongside the content."""

    colors: dict[str, str]
    typography: dict[str, object]
    theme: dict[str, str]
    css_variables: dict[str, str]
    css: str = ""


# === RECOMMENDATIONS ===


class Recommendation(BaseModel):
    type: Literal["content_quality", "specialty_detection", "services", "seo"]
    priority: Literal["low", "medium", "high"]
    message: str
    action: str = ""
