# src/pipeline/website_pipeline.py - v1
"""Website pipeline: top-level orchestrator for one generation request.

Chains:
  1. Input inspection + customization normalization
  2. Specialty resolution (explicit override or classifier)
  3. Content (cache -> generator -> validator, fallback engine on failure)
  4. Rendering (specialty body + page layout + stylesheet)
  5. Recommendations and front-end sections

Every failure up to and including content generation degrades into
fallback content. Render errors propagate.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime
from typing import Any, Mapping

from medsite.api.models import SectionResult, WebsiteResult
from medsite.cache.generation_cache import GenerationCache
from medsite.cache.keys import Region
from medsite.cache.models import CacheStats
from medsite.classification.classifier import SpecialtyClassifier
from medsite.config.specialties import get_profile, normalize_specialty
from medsite.core.errors import GenerationError
from medsite.core.models import (
    ClassificationResult,
    Customizations,
    GenerationRequest,
    WebsiteContent,
)
from medsite.fallback.engine import FallbackEngine
from medsite.generation.generator import SECTIONS, ContentGenerator
from medsite.logging.context import clear_context, set_request_context, set_specialty, stage
from medsite.pipeline.recommendations import build_recommendations, extract_sections
from medsite.rendering.customizations import normalize_customizations
from medsite.rendering.website import SiteRenderer
from medsite.validation.validator import ContentValidator, content_features, inspect_input

logger = logging.getLogger(__name__)


class WebsitePipeline:
    """Generate a complete practice website from a free-text description.

    Usage:
        pipeline = WebsitePipeline(classifier, generator, renderer, cache=cache)
        result = await pipeline.generate("We are a family dental practice...")
    """

    def __init__(
        self,
        classifier: SpecialtyClassifier,
        generator: ContentGenerator,
        renderer: SiteRenderer,
        validator: ContentValidator | None = None,
        fallback: FallbackEngine | None = None,
        cache: GenerationCache | None = None,
        template: str = "default",
    ) -> None:
        self.classifier = classifier
        self.generator = generator
        self.renderer = renderer
        self.validator = validator or ContentValidator()
        self.fallback = fallback or FallbackEngine()
        self.cache = cache
        self.template = template

    async def generate(
        self,
        raw_text: str,
        specialty: str | None = None,
        customizations: Mapping[str, Any] | Customizations | None = None,
        fresh: bool = False,
    ) -> WebsiteResult:
        """Run the full pipeline for one description.

        Args:
            raw_text: Free-text practice description.
            specialty: Optional explicit specialty (aliases accepted).
            customizations: Colors, fonts, layout, features and theme.
            fresh: Bypass cached content for this request.

        Raises:
            RenderError: Template missing or malformed.
        """
        request_id = uuid.uuid4().hex[:12]
        set_request_context(request_id)
        start = time.monotonic()
        try:
            warnings = inspect_input(raw_text)
            custom = normalize_customizations(customizations)

            with stage("classify"):
                classification = await self.resolve_specialty(raw_text, specialty, warnings)
            set_specialty(classification.specialty)

            with stage("content"):
                content, cache_hit = await self.content_for(
                    raw_text, classification.specialty, fresh
                )

            with stage("render"):
                site = await self.renderer.render(content, custom)

            year = datetime.now().year
            duration_ms = int((time.monotonic() - start) * 1000)
            logger.info(
                "Website generated: specialty=%s method=%s quality=%.2f fallback=%s cache_hit=%s %dms",
                classification.specialty, content.generation_method, content.quality_score,
                content.fallback_used, cache_hit, duration_ms,
            )
            return WebsiteResult(
                content=content,
                html=site.html,
                css=site.css,
                classification=classification,
                quality_score=content.quality_score,
                fallback_used=content.fallback_used,
                template_name=site.template_name,
                recommendations=build_recommendations(content, classification),
                sections=extract_sections(content, year),
                warnings=warnings,
                metadata={
                    "request_id": request_id,
                    "duration_ms": duration_ms,
                    "cache_hit": cache_hit,
                    "generation_method": content.generation_method,
                    "specialty_name": get_profile(classification.specialty).display_name,
                },
            )
        finally:
            clear_context()

    async def resolve_specialty(
        self,
        raw_text: str,
        specialty: str | None,
        warnings: list[str] | None = None,
    ) -> ClassificationResult:
        if specialty:
            resolved = normalize_specialty(specialty)
            if resolved is not None:
                return ClassificationResult(specialty=resolved, confidence=1.0, method="provided")
            logger.warning("Ignoring unknown specialty %r", specialty)
            if warnings is not None:
                warnings.append(f"Unknown specialty {specialty!r}; detected from the description instead")
        return await self.classifier.classify(raw_text)

    async def content_for(
        self, raw_text: str, specialty: str, fresh: bool = False
    ) -> tuple[WebsiteContent, bool]:
        """Validated content for (text, specialty) and whether it came from cache."""
        request = GenerationRequest(raw_text=raw_text, specialty=specialty, template=self.template)

        if self.cache is not None:
            cached = await self.cache.get(Region.CONTENT, request.content_key(fresh))
            if cached is not None:
                return WebsiteContent.model_validate(cached), True

        content = await self._produce(raw_text, specialty)

        if self.cache is not None and not content.fallback_used:
            await self.cache.set(Region.CONTENT, request.content_key(), content.model_dump(mode="json"))
        return content, False

    async def _produce(self, raw_text: str, specialty: str) -> WebsiteContent:
        try:
            raw = await self.generator.generate(raw_text, specialty)
        except GenerationError as exc:
            logger.warning("Content generation failed (%s); using template fallback", exc.kind.value)
            return self.fallback.fallback(raw_text, specialty)

        content = self.validator.validate(raw, specialty)
        if content.quality_score == 0.0:
            logger.warning("Generated content had nothing usable; using template fallback")
            return self.fallback.fallback(raw_text, specialty)
        return content

    async def regenerate_section(
        self,
        raw_text: str,
        specialty: str,
        section: str,
        content: WebsiteContent,
        customizations: Mapping[str, Any] | Customizations | None = None,
    ) -> SectionResult:
        """Regenerate one section of existing content and re-render the page.

        Raises:
            ValueError: Unknown section name.
            RenderError: Template missing or malformed.
        """
        if section not in SECTIONS:
            raise ValueError(f"Unknown section {section!r}. Available: {', '.join(SECTIONS)}")

        fallback_used = False
        try:
            raw = await self.generator.regenerate_section(raw_text, specialty, section)
        except GenerationError as exc:
            logger.warning("Section %s regeneration failed (%s); using skeleton", section, exc.kind.value)
            raw = self.fallback.section_fallback(section, specialty)
            fallback_used = True

        profile = get_profile(specialty)
        rule = getattr(self.validator, section)
        updated = content.model_copy(update={section: rule(raw, profile)}, deep=True)
        updated.content_features = content_features(updated)

        site = await self.renderer.render(updated, customizations)
        logger.info("Regenerated section %s for %s (fallback=%s)", section, specialty, fallback_used)
        return SectionResult(
            section=section,
            content=updated,
            html=site.html,
            css=site.css,
            fallback_used=fallback_used,
        )

    async def clear_all(self) -> None:
        if self.cache is not None:
            await self.cache.clear()

    async def stats(self) -> CacheStats | None:
        if self.cache is None:
            return None
        return await self.cache.stats()
