# tests/unit/pipeline/test_unit_website_pipeline.py - v1
"""Tests for pipeline/website_pipeline.py - orchestration and degradation."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from medsite.classification.classifier import SpecialtyClassifier
from medsite.core.errors import RenderError
from medsite.core.models import AISignal
from medsite.generation.generator import ContentGenerator
from medsite.llm.models import LLMResponse
from medsite.llm.retry import build_retry_configs
from medsite.logging.context import get_context
from medsite.pipeline.website_pipeline import WebsitePipeline
from medsite.rendering.engine import TemplateEngine
from medsite.rendering.store import TemplateStore
from medsite.rendering.website import SiteRenderer


def _response(payload: object) -> LLMResponse:
    return LLMResponse(
        content=json.dumps(payload), input_tokens=10, output_tokens=10,
        model="test", provider="test", latency_ms=5,
    )


def _pipeline(llm, cache=None, ai=None, store=None) -> WebsitePipeline:
    return WebsitePipeline(
        classifier=SpecialtyClassifier(ai_classifier=ai, cache=cache),
        generator=ContentGenerator(llm, retry_configs=build_retry_configs(0, 0.0)),
        renderer=SiteRenderer(TemplateEngine(store=store, cache=cache), year=2026),
        cache=cache,
    )


class TestGenerate:
    @pytest.mark.asyncio
    async def test_happy_path(self, mock_llm_client, cache, dental_description):
        result = await _pipeline(mock_llm_client, cache).generate(dental_description)

        assert result.classification.specialty == "dentistry"
        assert result.classification.method == "keyword"
        assert result.fallback_used is False
        assert result.quality_score == 1.0
        assert result.template_name == "dentistry"
        assert result.recommendations == []
        assert result.warnings == []
        assert "Bright Smile Family Dentistry" in result.html
        assert result.css and result.css in result.html
        assert result.metadata["cache_hit"] is False
        assert result.metadata["generation_method"] == "ai"
        assert result.metadata["specialty_name"] == "Dentistry"
        assert len(result.metadata["request_id"]) == 12
        assert result.sections["hero"]["headline"] == "Healthy Smiles Start Here"

    @pytest.mark.asyncio
    async def test_generation_failure_uses_fallback(self, cache, dental_description):
        llm = AsyncMock()
        llm.complete = AsyncMock(side_effect=ValueError("invalid api key"))
        pipeline = _pipeline(llm, cache)

        result = await pipeline.generate(dental_description)

        assert result.fallback_used is True
        assert result.content.generation_method == "template_fallback"
        assert result.quality_score == 0.6
        assert result.template_name == "dentistry"
        assert result.recommendations[0].type == "content_quality"
        stats = await pipeline.stats()
        assert stats.size_per_region["content"] == 0

    @pytest.mark.asyncio
    async def test_fallback_not_cached_so_ai_is_retried(self, cache, sample_ai_content, dental_description):
        llm = AsyncMock()
        llm.complete = AsyncMock(side_effect=[ValueError("down"), _response(sample_ai_content)])
        pipeline = _pipeline(llm, cache)

        first = await pipeline.generate(dental_description)
        second = await pipeline.generate(dental_description)

        assert first.fallback_used is True
        assert second.fallback_used is False
        assert second.metadata["cache_hit"] is False

    @pytest.mark.asyncio
    async def test_unusable_output_uses_fallback(self, dental_description):
        llm = AsyncMock()
        llm.complete = AsyncMock(return_value=_response({"unrelated": True}))
        result = await _pipeline(llm).generate(dental_description)
        assert result.fallback_used is True
        assert result.content.generation_method == "template_fallback"

    @pytest.mark.asyncio
    async def test_render_error_propagates(self, mock_llm_client, tmp_path, dental_description):
        pipeline = _pipeline(mock_llm_client, store=TemplateStore(tmp_path))
        with pytest.raises(RenderError):
            await pipeline.generate(dental_description)
        assert get_context().request_id is None

    @pytest.mark.asyncio
    async def test_context_cleared(self, mock_llm_client, dental_description):
        await _pipeline(mock_llm_client).generate(dental_description)
        assert get_context().as_dict() == {}

    @pytest.mark.asyncio
    async def test_empty_description_warns(self, mock_llm_client):
        result = await _pipeline(mock_llm_client).generate("")
        assert result.classification.method == "fallback"
        assert result.classification.specialty == "general-practice"
        assert result.warnings == ["Practice description is empty; generic content will be used"]
        assert any(r.type == "specialty_detection" for r in result.recommendations)


class TestSpecialtyOverride:
    @pytest.mark.asyncio
    async def test_provided_specialty(self, mock_llm_client, dental_description):
        ai = AsyncMock()
        pipeline = _pipeline(mock_llm_client, ai=ai)
        result = await pipeline.generate(dental_description, specialty="Cardiology")
        assert result.classification.specialty == "cardiology"
        assert result.classification.method == "provided"
        assert result.classification.confidence == 1.0
        assert result.template_name == "cardiology"
        ai.classify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_specialty_is_detected(self, mock_llm_client, dental_description):
        result = await _pipeline(mock_llm_client).generate(dental_description, specialty="astrology")
        assert result.classification.specialty == "dentistry"
        assert any("astrology" in w for w in result.warnings)


class TestContentCache:
    @pytest.mark.asyncio
    async def test_second_call_hits_cache(self, mock_llm_client, cache, dental_description):
        pipeline = _pipeline(mock_llm_client, cache)
        first = await pipeline.generate(dental_description)
        second = await pipeline.generate(dental_description)
        assert mock_llm_client.complete.await_count == 1
        assert second.metadata["cache_hit"] is True
        assert second.content == first.content
        assert second.html == first.html

    @pytest.mark.asyncio
    async def test_fresh_bypasses_cache(self, mock_llm_client, cache, dental_description):
        pipeline = _pipeline(mock_llm_client, cache)
        await pipeline.generate(dental_description)
        result = await pipeline.generate(dental_description, fresh=True)
        assert mock_llm_client.complete.await_count == 2
        assert result.metadata["cache_hit"] is False

    @pytest.mark.asyncio
    async def test_specialties_do_not_share_content(self, mock_llm_client, cache, dental_description):
        pipeline = _pipeline(mock_llm_client, cache)
        await pipeline.generate(dental_description, specialty="dentistry")
        result = await pipeline.generate(dental_description, specialty="cardiology")
        assert mock_llm_client.complete.await_count == 2
        assert result.content.specialty == "cardiology"

    @pytest.mark.asyncio
    async def test_clear_all(self, mock_llm_client, cache, dental_description):
        pipeline = _pipeline(mock_llm_client, cache)
        await pipeline.generate(dental_description)
        assert (await pipeline.stats()).size_per_region["content"] == 1
        await pipeline.clear_all()
        assert (await pipeline.stats()).total_size == 0

    @pytest.mark.asyncio
    async def test_no_cache(self, mock_llm_client):
        pipeline = _pipeline(mock_llm_client)
        assert await pipeline.stats() is None
        await pipeline.clear_all()


class TestRegenerateSection:
    @pytest.mark.asyncio
    async def test_hero(self, sample_ai_content, dental_description):
        llm = AsyncMock()
        llm.complete = AsyncMock(side_effect=[
            _response(sample_ai_content),
            _response({"headline": "Smile Brighter Today", "subheadline": "New patients always welcome", "ctaText": "Call Now"}),
        ])
        pipeline = _pipeline(llm)
        original = (await pipeline.generate(dental_description)).content

        result = await pipeline.regenerate_section(dental_description, "dentistry", "hero", original)

        assert result.section == "hero"
        assert result.fallback_used is False
        assert result.content.hero.headline == "Smile Brighter Today"
        assert result.content.services == original.services
        assert original.hero.headline == "Healthy Smiles Start Here"
        assert "<h1>Smile Brighter Today</h1>" in result.html

    @pytest.mark.asyncio
    async def test_services_repaired(self, sample_ai_content, dental_description):
        llm = AsyncMock()
        llm.complete = AsyncMock(side_effect=[
            _response(sample_ai_content),
            _response([{"name": "Whitening", "description": "Brighter teeth in one visit"}]),
        ])
        pipeline = _pipeline(llm)
        original = (await pipeline.generate(dental_description)).content

        result = await pipeline.regenerate_section(dental_description, "dentistry", "services", original)

        assert result.content.services[0].name == "Whitening"
        assert len(result.content.services) == 3

    @pytest.mark.asyncio
    async def test_failure_uses_skeleton(self, sample_ai_content, dental_description):
        llm = AsyncMock()
        llm.complete = AsyncMock(side_effect=[_response(sample_ai_content), ValueError("down")])
        pipeline = _pipeline(llm)
        original = (await pipeline.generate(dental_description)).content

        result = await pipeline.regenerate_section(dental_description, "dentistry", "about", original)

        assert result.fallback_used is True
        assert result.content.about.title == "About Our Dental Practice"

    @pytest.mark.asyncio
    async def test_unknown_section(self, mock_llm_client, sample_ai_content):
        from medsite.validation.validator import ContentValidator

        content = ContentValidator().validate(sample_ai_content, "dentistry")
        with pytest.raises(ValueError, match="Unknown section"):
            await _pipeline(mock_llm_client).regenerate_section("t", "dentistry", "seo", content)
