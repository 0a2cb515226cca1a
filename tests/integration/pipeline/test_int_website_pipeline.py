# tests/integration/pipeline/test_int_website_pipeline.py - v2
"""End-to-end pipeline runs with a mocked LLM and the bundled templates."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from medsite.api.facade import build_pipeline
from medsite.cache.cache_factory import create_generation_cache
from medsite.cache.keys import Region
from medsite.config.settings import Settings
from medsite.llm.models import LLMResponse

pytestmark = pytest.mark.integration


def _response(payload: object) -> LLMResponse:
    return LLMResponse(
        content=json.dumps(payload), input_tokens=100, output_tokens=50,
        model="test", provider="test", latency_ms=10,
    )


class TestDentalPractice:
    @pytest.mark.asyncio
    async def test_full_site(self, sample_ai_content, dental_description):
        llm = AsyncMock()
        llm.complete = AsyncMock(return_value=_response(sample_ai_content))
        cache = create_generation_cache()
        pipeline = build_pipeline(
            Settings(_env_file=None), cache=cache, classifier_llm=llm, generator_llm=llm
        )

        result = await pipeline.generate(
            dental_description,
            customizations={
                "theme": "modern",
                "colors": {"primary": "#0f766e"},
                "features": {"appointment_booking": True},
            },
        )

        assert result.classification.specialty == "dentistry"
        assert result.classification.method == "keyword"
        assert result.template_name == "dentistry"
        assert result.fallback_used is False
        assert result.quality_score == 1.0
        assert result.html.startswith("<!DOCTYPE html>")
        assert "<title>Bright Smile Family Dentistry - Austin Dentist</title>" in result.html
        assert "Root Canal Therapy" in result.html
        assert "tel:" in result.html
        assert "--color-primary: #0f766e;" in result.css
        assert result.sections["hero"]["headline"] == "Healthy Smiles Start Here"
        assert result.recommendations == []

        # Second identical request is served from cache without another LLM call
        calls = llm.complete.await_count
        again = await pipeline.generate(dental_description)
        assert llm.complete.await_count == calls
        assert again.metadata["cache_hit"] is True
        assert again.content == result.content

        stats = await cache.stats()
        assert stats.size_per_region[Region.CONTENT.value] == 1
        assert stats.size_per_region[Region.CLASSIFICATION.value] == 1


class TestShortDescription:
    @pytest.mark.asyncio
    async def test_teeth_and_dentistry_practice(self, sample_ai_content):
        async def answer(**kwargs):
            if "classifier" in kwargs["system"]:
                return _response({"specialty": "dentistry", "confidence": 0.9, "rationale": "teeth"})
            return _response(sample_ai_content)

        llm = AsyncMock()
        llm.complete = AsyncMock(side_effect=answer)
        pipeline = build_pipeline(
            Settings(_env_file=None), cache=create_generation_cache(), classifier_llm=llm, generator_llm=llm
        )

        result = await pipeline.generate("teeth and dentistry practice")

        assert result.classification.specialty == "dentistry"
        assert result.classification.method in {"keyword", "hybrid"}
        assert result.content.specialty == "dentistry"
        assert "Bright Smile Family Dentistry" in result.html
        assert result.html.count('class="service-card') >= 3


class TestDegradedRun:
    @pytest.mark.asyncio
    async def test_llm_down_still_renders(self):
        llm = AsyncMock()
        llm.complete = AsyncMock(side_effect=ConnectionError("unreachable"))
        pipeline = build_pipeline(
            Settings(_env_file=None, generation_max_retries=0),
            cache=create_generation_cache(),
            classifier_llm=llm,
            generator_llm=llm,
        )

        result = await pipeline.generate(
            "Our pediatric clinic offers well-child visits and vaccinations for kids "
            "and adolescents. Call (415) 555-0100 or email info@kidsclinic.example."
        )

        assert result.classification.specialty == "pediatrics"
        assert result.fallback_used is True
        assert result.content.generation_method == "template_fallback"
        assert result.template_name == "pediatrics"
        assert "Specialized Care for Children" in result.html
        assert any(r.type == "content_quality" for r in result.recommendations)
