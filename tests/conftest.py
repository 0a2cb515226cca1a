# tests/conftest.py - v3
"""Shared test fixtures for all unit and integration tests.

Provides mock LLM clients, sample generator output, settings and fresh
in-memory caches. No external dependencies; all I/O is mocked.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from medsite.api.facade import reset_shared_state
from medsite.cache.cache_factory import create_generation_cache
from medsite.cache.generation_cache import GenerationCache
from medsite.config.settings import Settings
from medsite.llm.models import LLMResponse
from medsite.logging.context import clear_context


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_ai_content() -> dict:
    """Complete generator output for a dental practice (quality 1.0)."""
    return {
        "websiteTitle": "Bright Smile Family Dentistry",
        "tagline": "Gentle Dental Care for the Whole Family",
        "heroSection": {
            "headline": "Healthy Smiles Start Here",
            "subheadline": "Comprehensive dental care in a relaxed, modern office",
            "ctaText": "Book Your Visit",
        },
        "aboutSection": {
            "title": "About Bright Smile",
            "content": (
                "Bright Smile Family Dentistry has cared for local families for over "
                "fifteen years. Our experienced team combines gentle chairside manner "
                "with modern technology to keep every smile healthy."
            ),
            "highlights": ["Same-day emergency visits", "Family friendly", "Modern imaging"],
        },
        "services": [
            {"name": "Teeth Cleaning", "description": "Thorough professional cleanings", "icon": "tooth"},
            {"name": "Root Canal Therapy", "description": "Pain-free endodontic treatment", "icon": "tooth"},
            {"name": "Braces", "description": "Orthodontic care for teens and adults", "icon": "braces"},
            {"name": "Dental Implants", "description": "Permanent replacement for missing teeth", "icon": "implant"},
        ],
        "contactInfo": {
            "phone": "(512) 555-0142",
            "email": "hello@brightsmile.example",
            "address": "400 Congress Ave, Austin, TX 78701",
            "hours": "Mon-Fri 8:00 AM - 6:00 PM",
        },
        "seoMeta": {
            "title": "Bright Smile Family Dentistry - Austin Dentist",
            "description": "Family dentistry in Austin offering cleanings, root canals, braces and implants.",
            "keywords": ["dentist", "family dentistry", "dental implants", "braces", "root canal"],
        },
    }


@pytest.fixture
def dental_description() -> str:
    return (
        "We are a family dental practice offering teeth cleaning, root canal therapy, "
        "braces and dental implants. Our experienced dentist has 15 years of practice."
    )


# === FIXTURES: Mock LLM ===


def llm_response(payload: object) -> LLMResponse:
    content = payload if isinstance(payload, str) else json.dumps(payload)
    return LLMResponse(
        content=content,
        input_tokens=100,
        output_tokens=50,
        model="test",
        provider="test",
        latency_ms=100,
    )


@pytest.fixture
def mock_llm_client(sample_ai_content: dict) -> AsyncMock:
    """Mock BaseLLMClient that always answers with sample_ai_content."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=llm_response(sample_ai_content))
    client.provider_name = "mock"
    return client


# === FIXTURES: Settings & cache ===


@pytest.fixture
def settings() -> Settings:
    """Defaults only; ignores any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def cache() -> GenerationCache:
    """Fresh three-region in-memory cache per test."""
    return create_generation_cache()


@pytest.fixture(autouse=True)
def _reset_log_context():
    yield
    clear_context()


@pytest.fixture(autouse=True)
def _reset_facade_state():
    """Each test starts without the process-wide cache and pipeline."""
    reset_shared_state()
    yield
    reset_shared_state()
