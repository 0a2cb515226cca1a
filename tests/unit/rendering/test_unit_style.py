# tests/unit/rendering/test_unit_style.py - v1
"""Tests for rendering/style.py - colors, contrast and the stylesheet."""

from __future__ import annotations

import pytest

from medsite.core.models import ColorOverrides, Customizations, FontSettings, LayoutSettings
from medsite.rendering.engine import TemplateEngine
from medsite.rendering.style import (
    StyleProcessor,
    contrast_ratio,
    dark_variant,
    light_variant,
    parse_rgb,
    readable_on,
)


@pytest.fixture
def processor() -> StyleProcessor:
    return StyleProcessor(TemplateEngine())


class TestColorMath:
    @pytest.mark.parametrize(
        "value,expected",
        [("#fff", (255, 255, 255)), ("#0ea5e9", (14, 165, 233)), ("rgb(1, 2, 3)", (1, 2, 3)),
         ("rgba(300, 0, 0, 0.5)", (255, 0, 0)), ("black", (0, 0, 0))],
    )
    def test_parse_rgb(self, value, expected):
        assert parse_rgb(value) == expected

    @pytest.mark.parametrize("value", ["navy", "hsl(1, 2%, 3%)", "#zzzzzz"])
    def test_parse_rgb_unmeasurable(self, value):
        assert parse_rgb(value) is None

    def test_contrast_extremes(self):
        assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
        assert contrast_ratio("#123456", "#123456") == pytest.approx(1.0)
        assert contrast_ratio("navy", "#ffffff") is None

    def test_readable_on(self):
        assert readable_on("#ffffff") == "#000000"
        assert readable_on("#111827") == "#ffffff"

    def test_variants(self):
        assert light_variant("#0ea5e9") == "rgba(14, 165, 233, 0.1)"
        assert dark_variant("#0ea5e9") == "rgb(0, 115, 183)"
        assert dark_variant("navy") == "navy"


class TestColors:
    def test_specialty_palette(self, processor):
        colors = processor.colors("dentistry", Customizations())
        assert colors["primary"] == "#0ea5e9"
        assert colors["light"] == "rgba(14, 165, 233, 0.1)"
        assert colors["on_primary"] in ("#000000", "#ffffff")

    def test_overrides_win(self, processor):
        custom = Customizations(colors=ColorOverrides(primary="#112233", accent="teal"))
        colors = processor.colors("cardiology", custom)
        assert colors["primary"] == "#112233"
        assert colors["accent"] == "teal"
        assert colors["secondary"] == "#64748b"

    def test_low_contrast_text_fixed(self, processor):
        custom = Customizations(colors=ColorOverrides(text="#eeeeee", background="#ffffff"))
        assert processor.colors("dentistry", custom)["text"] == "#000000"

    def test_unmeasurable_text_left_alone(self, processor):
        custom = Customizations(colors=ColorOverrides(text="navy"))
        assert processor.colors("dentistry", custom)["text"] == "navy"


class TestBuild:
    @pytest.mark.asyncio
    async def test_css_variables_rendered(self, processor):
        custom = Customizations(fonts=FontSettings(heading_font="Roboto", font_size="large"))
        style = await processor.build("dentistry", custom)
        assert "--color-primary: #0ea5e9;" in style.css
        assert "--font-heading: 'Roboto', sans-serif;" in style.css
        assert "--font-size-base: 18px;" in style.css
        assert style.css_variables["--border-radius"] == "0.375rem"

    @pytest.mark.asyncio
    async def test_theme(self, processor):
        style = await processor.build("dentistry", Customizations(theme="modern"))
        assert style.theme["border_radius"] == "0.5rem"
        assert "--border-radius: 0.5rem;" in style.css

    @pytest.mark.asyncio
    async def test_layout_switches(self, processor):
        fixed = await processor.build("dentistry", Customizations())
        static = await processor.build(
            "dentistry",
            Customizations(layout=LayoutSettings(header_style="static", sidebar_enabled=True)),
        )
        assert "position: sticky;" in fixed.css
        assert "position: sticky;" not in static.css
        assert "grid-template-columns: 3fr 1fr" in static.css
        assert "grid-template-columns: 3fr 1fr" not in fixed.css
