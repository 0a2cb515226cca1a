# src/api/facade.py - v3
"""Public API facade: single entry point for website generation.

Usage:
    from medsite.api.facade import generate_website
    result = await generate_website("We are a family dental practice...")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from medsite.api.models import WebsiteResult
from medsite.cache.cache_factory import create_generation_cache
from medsite.classification.ai_classifier import AISpecialtyClassifier
from medsite.classification.classifier import SpecialtyClassifier
from medsite.classification.keyword_scorer import KeywordScorer
from medsite.config.settings import Settings
from medsite.generation.generator import ContentGenerator
from medsite.llm.retry import build_retry_configs
from medsite.rendering.engine import TemplateEngine
from medsite.rendering.store import TemplateStore
from medsite.rendering.website import SiteRenderer

if TYPE_CHECKING:
    from medsite.cache.generation_cache import GenerationCache
    from medsite.core.models import Customizations
    from medsite.llm.base_client import BaseLLMClient
    from medsite.pipeline.website_pipeline import WebsitePipeline

logger = logging.getLogger(__name__)

# Process-wide state: one cache shared by every pipeline the facade builds,
# and the pipeline used by generate_website() when nothing is injected.
_shared_cache: GenerationCache | None = None
_default_pipeline: WebsitePipeline | None = None


def shared_cache(settings: Settings | None = None) -> GenerationCache:
    """Return the process-wide generation cache, building it on first use.

    Later calls return the same instance whatever ``settings`` they pass.
    """
    global _shared_cache
    if _shared_cache is None:
        _shared_cache = create_generation_cache(settings or Settings())
        logger.info("Created shared generation cache")
    return _shared_cache


def default_pipeline() -> WebsitePipeline:
    """Return the process-wide pipeline built from .env settings."""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = build_pipeline()
    return _default_pipeline


def reset_shared_state() -> None:
    """Drop the shared cache and default pipeline (tests, reconfiguration)."""
    global _shared_cache, _default_pipeline
    _shared_cache = None
    _default_pipeline = None


def build_pipeline(
    settings: Settings | None = None,
    cache: GenerationCache | None = None,
    classifier_llm: BaseLLMClient | None = None,
    generator_llm: BaseLLMClient | None = None,
) -> WebsitePipeline:
    """Wire every pipeline component from settings.

    Args:
        settings: Global settings. Loaded from .env if None.
        cache: Generation cache. The process-wide shared_cache() if None.
        classifier_llm: LLM for the AI classifier. Resolved from settings if None.
        generator_llm: LLM for content generation. Resolved from settings if None.

    Build once and reuse the returned pipeline across requests; it holds
    the LLM clients and compiled templates.
    """
    from medsite.pipeline.llm_factory import LLMFactory
    from medsite.pipeline.website_pipeline import WebsitePipeline

    settings = settings or Settings()
    if cache is None:
        cache = shared_cache(settings)

    if generator_llm is None or (classifier_llm is None and settings.classifier_ai_enabled):
        factory = LLMFactory(settings)
        generator_llm = generator_llm or factory("generator")
        if settings.classifier_ai_enabled:
            classifier_llm = classifier_llm or factory("classifier")

    ai_classifier = None
    if settings.classifier_ai_enabled and classifier_llm is not None:
        ai_classifier = AISpecialtyClassifier(
            classifier_llm,
            max_tokens=settings.classifier_max_tokens,
            temperature=settings.classifier_temperature,
            timeout_s=settings.classifier_timeout_s,
        )

    classifier = SpecialtyClassifier(
        scorer=KeywordScorer(confidence_scale=settings.keyword_confidence_scale),
        ai_classifier=ai_classifier,
        cache=cache,
        confidence_threshold=settings.keyword_confidence_threshold,
        fallback_confidence=settings.fallback_confidence,
    )
    generator = ContentGenerator(
        generator_llm,
        max_tokens=settings.generation_max_tokens,
        temperature=settings.generation_temperature,
        timeout_s=settings.generation_timeout_s,
        retry_configs=build_retry_configs(
            settings.generation_max_retries, settings.generation_retry_base_delay_s
        ),
    )
    engine = TemplateEngine(store=TemplateStore(settings.templates_dir), cache=cache)

    return WebsitePipeline(
        classifier=classifier,
        generator=generator,
        renderer=SiteRenderer(engine),
        cache=cache,
    )


async def generate_website(
    raw_text: str,
    specialty: str | None = None,
    customizations: Mapping[str, Any] | Customizations | None = None,
    fresh: bool = False,
    settings: Settings | None = None,
    cache: GenerationCache | None = None,
    llm: BaseLLMClient | None = None,
    pipeline: WebsitePipeline | None = None,
) -> WebsiteResult:
    """Generate a practice website end-to-end.

    This is the main public API. Classification and generation failures
    degrade into fallback content (see ``WebsiteResult.fallback_used``);
    only rendering failures raise.

    Without ``pipeline``, ``settings`` or ``llm`` the process-wide
    default_pipeline() serves the request. Otherwise a pipeline is wired
    for the call on top of ``cache`` or the shared cache, so cached
    classifications and content survive across calls either way.

    Args:
        raw_text: Free-text practice description (e.g. a transcription).
        specialty: Optional explicit specialty; detected when omitted.
        customizations: Presentation overrides (colors, fonts, layout, ...).
        fresh: Ignore cached content for this request.
        settings: Global settings. Loaded from .env if None.
        cache: Generation cache. The process-wide shared_cache() if None.
        llm: Single LLM client used for both classification and generation.
        pipeline: Prebuilt pipeline (see build_pipeline); wins over the
            other wiring arguments.

    Returns:
        WebsiteResult with content, HTML, CSS and classification.

    Raises:
        RenderError: Template missing or malformed.
    """
    if pipeline is None:
        if settings is None and cache is None and llm is None:
            pipeline = default_pipeline()
        else:
            pipeline = build_pipeline(
                settings, cache=cache, classifier_llm=llm, generator_llm=llm
            )
    return await pipeline.generate(
        raw_text, specialty=specialty, customizations=customizations, fresh=fresh
    )
