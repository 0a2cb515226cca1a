# src/rendering/customizations.py - v1
"""Normalize caller-supplied presentation choices.

Accepts camelCase or snake_case keys. Every value that is not in its closed
set, or not a recognizable CSS color, is dropped in favour of the default;
normalization never fails.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from medsite.core.models import (
    ColorOverrides,
    Customizations,
    FeatureFlags,
    FontSettings,
    LayoutSettings,
)

logger = logging.getLogger(__name__)

SUPPORTED_FONTS = {
    "Inter": "'Inter', sans-serif",
    "Roboto": "'Roboto', sans-serif",
    "Open Sans": "'Open Sans', sans-serif",
    "Lato": "'Lato', sans-serif",
    "Montserrat": "'Montserrat', sans-serif",
    "Poppins": "'Poppins', sans-serif",
}
FONT_SIZES = ("small", "medium", "large")
THEMES = ("modern", "classic", "minimal", "professional")
HEADER_STYLES = ("fixed", "static", "transparent")
FOOTER_STYLES = ("simple", "detailed", "minimal")

NAMED_COLORS = frozenset({
    "black", "white", "gray", "grey", "silver", "red", "maroon", "orange",
    "yellow", "olive", "lime", "green", "teal", "aqua", "cyan", "blue",
    "navy", "purple", "fuchsia", "magenta", "pink", "brown", "indigo",
    "crimson", "coral", "salmon", "gold", "khaki", "lavender", "beige",
    "ivory", "tomato", "turquoise", "skyblue", "steelblue", "slategray",
    "darkblue", "darkgreen", "darkred", "lightblue", "lightgreen", "lightgray",
})

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_ALPHA = r"(?:\s*,\s*(?:0|1|0?\.\d+|1\.0+))?"
_RGB_RE = re.compile(rf"^rgba?\(\s*\d{{1,3}}\s*,\s*\d{{1,3}}\s*,\s*\d{{1,3}}{_ALPHA}\s*\)$")
_HSL_RE = re.compile(rf"^hsla?\(\s*\d{{1,3}}\s*,\s*\d{{1,3}}%\s*,\s*\d{{1,3}}%{_ALPHA}\s*\)$")


def validate_color(value: Any) -> str | None:
    """Return ``value`` if it is a hex, rgb(a), hsl(a) or named CSS color."""
    if not isinstance(value, str):
        return None
    color = value.strip()
    if _HEX_RE.match(color) or _RGB_RE.match(color) or _HSL_RE.match(color):
        return color
    if color.lower() in NAMED_COLORS:
        return color.lower()
    return None


def _get(data: Mapping[str, Any], snake: str) -> Any:
    head, *rest = snake.split("_")
    camel = head + "".join(part.title() for part in rest)
    return data.get(snake, data.get(camel))


def _choice(value: Any, allowed: tuple[str, ...], default: str, field: str) -> str:
    if value is None:
        return default
    if value in allowed:
        return value
    logger.debug("Ignoring unsupported %s %r", field, value)
    return default


def _flag(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _section(raw: Mapping[str, Any], *names: str) -> Mapping[str, Any]:
    for name in names:
        value = raw.get(name)
        if isinstance(value, Mapping):
            return value
    return {}


def normalize_customizations(raw: Mapping[str, Any] | Customizations | None) -> Customizations:
    """Build validated Customizations from an untrusted mapping."""
    if isinstance(raw, Customizations):
        return raw
    if not isinstance(raw, Mapping):
        return Customizations()

    colors_raw = _section(raw, "colors", "colorScheme", "color_scheme")
    colors = ColorOverrides(**{
        name: validate_color(colors_raw.get(name))
        for name in ColorOverrides.model_fields
    })

    fonts_raw = _section(raw, "fonts", "typography")
    default_fonts = FontSettings()
    fonts = FontSettings(
        heading_font=_choice(
            _get(fonts_raw, "heading_font"), tuple(SUPPORTED_FONTS), default_fonts.heading_font, "font"
        ),
        body_font=_choice(
            _get(fonts_raw, "body_font"), tuple(SUPPORTED_FONTS), default_fonts.body_font, "font"
        ),
        font_size=_choice(_get(fonts_raw, "font_size"), FONT_SIZES, default_fonts.font_size, "font size"),
    )

    layout_raw = _section(raw, "layout")
    default_layout = LayoutSettings()
    layout = LayoutSettings(
        header_style=_choice(
            _get(layout_raw, "header_style"), HEADER_STYLES, default_layout.header_style, "header style"
        ),
        footer_style=_choice(
            _get(layout_raw, "footer_style"), FOOTER_STYLES, default_layout.footer_style, "footer style"
        ),
        sidebar_enabled=_flag(_get(layout_raw, "sidebar_enabled"), default_layout.sidebar_enabled),
    )

    features_raw = _section(raw, "features")
    default_features = FeatureFlags()
    features = FeatureFlags(**{
        name: _flag(_get(features_raw, name), getattr(default_features, name))
        for name in FeatureFlags.model_fields
    })

    return Customizations(
        colors=colors,
        fonts=fonts,
        layout=layout,
        features=features,
        theme=_choice(raw.get("theme"), THEMES, "professional", "theme"),
    )
