# src/rendering/style.py - v1
"""Resolve specialty colors, typography and theme into CSS.

The stylesheet itself is a template (``styles/site.css``) rendered through
the same engine as the pages.
"""

from __future__ import annotations

import logging
import re

from medsite.config.specialties import get_profile
from medsite.core.models import Customizations, StyleData
from medsite.rendering.customizations import SUPPORTED_FONTS
from medsite.rendering.engine import TemplateEngine

logger = logging.getLogger(__name__)

STYLESHEET = "styles/site.css"
MIN_CONTRAST = 4.5

FONT_SIZES = {
    "small": {
        "base": "14px", "sm": "12px", "lg": "16px", "xl": "18px", "2xl": "20px",
        "3xl": "24px", "4xl": "28px", "5xl": "32px", "6xl": "36px",
    },
    "medium": {
        "base": "16px", "sm": "14px", "lg": "18px", "xl": "20px", "2xl": "24px",
        "3xl": "30px", "4xl": "36px", "5xl": "48px", "6xl": "64px",
    },
    "large": {
        "base": "18px", "sm": "16px", "lg": "20px", "xl": "24px", "2xl": "28px",
        "3xl": "36px", "4xl": "48px", "5xl": "64px", "6xl": "72px",
    },
}

THEMES = {
    "modern": {
        "border_radius": "0.5rem",
        "shadow": "0 4px 6px -1px rgba(0, 0, 0, 0.1)",
        "transition": "all 0.3s ease",
        "gradient": "linear-gradient(135deg, var(--color-primary), var(--color-accent))",
    },
    "classic": {
        "border_radius": "0.25rem",
        "shadow": "0 2px 4px rgba(0, 0, 0, 0.1)",
        "transition": "all 0.2s ease",
        "gradient": "linear-gradient(to right, var(--color-primary), var(--color-secondary))",
    },
    "minimal": {
        "border_radius": "0.125rem",
        "shadow": "0 1px 2px rgba(0, 0, 0, 0.05)",
        "transition": "all 0.15s ease",
        "gradient": "linear-gradient(180deg, var(--color-primary), var(--color-primary))",
    },
    "professional": {
        "border_radius": "0.375rem",
        "shadow": "0 1px 3px rgba(0, 0, 0, 0.1)",
        "transition": "all 0.2s ease",
        "gradient": "linear-gradient(135deg, var(--color-primary) 0%, var(--color-accent) 100%)",
    },
}

SPACING = {"xs": "0.25rem", "sm": "0.5rem", "md": "1rem", "lg": "1.5rem", "xl": "2rem", "2xl": "3rem"}

_RGB_FUNC_RE = re.compile(r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})")
_NAMED_RGB = {"black": (0, 0, 0), "white": (255, 255, 255)}


def parse_rgb(color: str) -> tuple[int, int, int] | None:
    """RGB triple for hex, rgb() and black/white; None for anything else."""
    color = color.strip().lower()
    if color.startswith("#"):
        digits = color[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) != 6:
            return None
        try:
            return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]
        except ValueError:
            return None
    match = _RGB_FUNC_RE.match(color)
    if match:
        return tuple(min(255, int(v)) for v in match.groups())  # type: ignore[return-value]
    return _NAMED_RGB.get(color)


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    def channel(value: int) -> float:
        c = value / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(v) for v in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: str, second: str) -> float | None:
    """WCAG contrast ratio, or None when either color cannot be measured."""
    a, b = parse_rgb(first), parse_rgb(second)
    if a is None or b is None:
        return None
    la, lb = sorted((relative_luminance(a), relative_luminance(b)), reverse=True)
    return (la + 0.05) / (lb + 0.05)


def readable_on(background: str) -> str:
    """Black or white, whichever reads better on ``background``."""
    on_black = contrast_ratio("#000000", background) or 0.0
    on_white = contrast_ratio("#ffffff", background) or 0.0
    return "#000000" if on_black >= on_white else "#ffffff"


def light_variant(color: str) -> str:
    rgb = parse_rgb(color)
    if rgb is None:
        return color
    return "rgba({}, {}, {}, 0.1)".format(*rgb)


def dark_variant(color: str) -> str:
    rgb = parse_rgb(color)
    if rgb is None:
        return color
    return "rgb({}, {}, {})".format(*(max(0, v - 50) for v in rgb))


class StyleProcessor:
    """Build StyleData for a specialty and a set of customizations."""

    def __init__(self, engine: TemplateEngine) -> None:
        self.engine = engine

    def colors(self, specialty: str, customizations: Customizations) -> dict[str, str]:
        scheme = get_profile(specialty).colors
        overrides = customizations.colors
        colors = {
            "primary": overrides.primary or scheme.primary,
            "secondary": overrides.secondary or scheme.secondary,
            "accent": overrides.accent or scheme.accent,
            "background": overrides.background or scheme.background,
            "text": overrides.text or scheme.text,
        }
        colors["light"] = light_variant(colors["primary"])
        colors["dark"] = dark_variant(colors["primary"])

        ratio = contrast_ratio(colors["text"], colors["background"])
        if ratio is not None and ratio < MIN_CONTRAST:
            adjusted = readable_on(colors["background"])
            logger.info(
                "Text color %s has contrast %.2f on %s; using %s",
                colors["text"], ratio, colors["background"], adjusted,
            )
            colors["text"] = adjusted
        colors["on_primary"] = readable_on(colors["primary"]) if parse_rgb(colors["primary"]) else "#ffffff"
        return colors

    @staticmethod
    def typography(customizations: Customizations) -> dict[str, object]:
        fonts = customizations.fonts
        return {
            "heading_font": SUPPORTED_FONTS.get(fonts.heading_font, SUPPORTED_FONTS["Inter"]),
            "body_font": SUPPORTED_FONTS.get(fonts.body_font, SUPPORTED_FONTS["Inter"]),
            "font_size": dict(FONT_SIZES.get(fonts.font_size, FONT_SIZES["medium"])),
            "line_height": {"tight": "1.25", "normal": "1.5", "relaxed": "1.75"},
            "font_weight": {"light": "300", "normal": "400", "medium": "500", "semibold": "600", "bold": "700"},
        }

    @staticmethod
    def css_variables(colors: dict[str, str], typography: dict[str, object], theme: dict[str, str]) -> dict[str, str]:
        variables = {f"--color-{name.replace('_', '-')}": value for name, value in colors.items()}
        variables["--font-heading"] = str(typography["heading_font"])
        variables["--font-body"] = str(typography["body_font"])
        sizes = typography["font_size"]
        if isinstance(sizes, dict):
            variables.update({f"--font-size-{name}": value for name, value in sizes.items()})
        variables.update({f"--spacing-{name}": value for name, value in SPACING.items()})
        variables.update({f"--{name.replace('_', '-')}": value for name, value in theme.items()})
        return variables

    async def build(self, specialty: str, customizations: Customizations) -> StyleData:
        colors = self.colors(specialty, customizations)
        typography = self.typography(customizations)
        theme = dict(THEMES.get(customizations.theme, THEMES["professional"]))
        variables = self.css_variables(colors, typography, theme)

        layout = customizations.layout
        css = await self.engine.render_named(STYLESHEET, {
            "variables": [{"name": k, "value": v} for k, v in variables.items()],
            "header_fixed": layout.header_style == "fixed",
            "header_transparent": layout.header_style == "transparent",
            "footer_minimal": layout.footer_style == "minimal",
            "sidebar_enabled": layout.sidebar_enabled,
        })
        return StyleData(
            colors=colors,
            typography=typography,
            theme=theme,
            css_variables=variables,
            css=css,
        )
