# tests/unit/core/test_unit_errors.py - v1
"""Tests for core/errors.py."""

from __future__ import annotations

from medsite.core.errors import (
    GenerationError,
    GenerationErrorKind,
    MedsiteError,
    RenderError,
    SkeletonNotFoundError,
    TemplateSyntaxError,
)


class TestGenerationError:
    def test_message_includes_kind(self):
        err = GenerationError(GenerationErrorKind.RATE_LIMITED, "429 from provider", attempts=3)
        assert str(err) == "rate_limited: 429 from provider"
        assert err.kind is GenerationErrorKind.RATE_LIMITED
        assert err.attempts == 3

    def test_kind_only(self):
        assert str(GenerationError(GenerationErrorKind.AI_UNAVAILABLE)) == "ai_unavailable"


class TestRenderErrors:
    def test_syntax_error_is_render_error(self):
        err = TemplateSyntaxError("Unclosed block", position=12)
        assert isinstance(err, RenderError)
        assert isinstance(err, MedsiteError)
        assert err.position == 12
        assert "offset 12" in str(err)

    def test_skeleton_not_found(self):
        err = SkeletonNotFoundError("astrology")
        assert err.specialty == "astrology"
        assert "astrology" in str(err)
