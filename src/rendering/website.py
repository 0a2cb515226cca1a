# src/rendering/website.py - v2
"""Turn validated WebsiteContent into a complete HTML page.

Two passes through the engine: the specialty body template, then the page
layout with the rendered body inserted raw.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from medsite.config.specialties import GENERAL_PRACTICE, get_profile
from medsite.core.models import Customizations, StyleData, WebsiteContent
from medsite.rendering.customizations import normalize_customizations
from medsite.rendering.engine import TemplateEngine
from medsite.rendering.style import StyleProcessor
from medsite.validation.sanitize import truncate

logger = logging.getLogger(__name__)

LAYOUT = "layouts/page"
SPECIALTY_DIR = "specialties"
PAGE_TITLE_MAX = 55

_TEMPLATE_NAME_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class RenderedSite:
    html: str
    css: str
    template_name: str
    style: StyleData


def page_title(content: WebsiteContent) -> str:
    if content.seo.title:
        return truncate(content.seo.title, PAGE_TITLE_MAX)
    display = get_profile(content.specialty).display_name
    return truncate(f"{content.title} | {display}", PAGE_TITLE_MAX)


class SiteRenderer:
    """Render a practice website from content and customizations."""

    def __init__(
        self,
        engine: TemplateEngine,
        style_processor: StyleProcessor | None = None,
        year: int | None = None,
    ) -> None:
        self.engine = engine
        self.style_processor = style_processor or StyleProcessor(engine)
        self._year = year

    def select_template(self, specialty: str) -> str:
        """Specialty template name, or general practice when none exists."""
        if _TEMPLATE_NAME_RE.match(specialty) and self.engine.store.exists(
            f"{SPECIALTY_DIR}/{specialty}"
        ):
            return specialty
        logger.debug("No template for %s; using %s", specialty, GENERAL_PRACTICE)
        return GENERAL_PRACTICE

    def prepare_data(
        self,
        content: WebsiteContent,
        style: StyleData,
        customizations: Customizations,
    ) -> dict[str, Any]:
        site = content.model_dump(mode="json")
        site["content_features"] = sorted(content.content_features)
        return {
            **site,
            "site": site,
            "specialty_name": get_profile(content.specialty).display_name,
            "page_title": page_title(content),
            "colors": style.colors,
            "typography": style.typography,
            "theme": style.theme,
            "theme_name": customizations.theme,
            "css": style.css,
            "features": customizations.features.model_dump(),
            "layout": customizations.layout.model_dump(),
            "current_year": self._year or datetime.now().year,
        }

    async def render(
        self,
        content: WebsiteContent,
        customizations: Mapping[str, Any] | Customizations | None = None,
    ) -> RenderedSite:
        """Render ``content`` into a full page.

        Raises:
            RenderError: Template missing or malformed.
        """
        custom = normalize_customizations(customizations)
        style = await self.style_processor.build(content.specialty, custom)
        template_name = self.select_template(content.specialty)
        data = self.prepare_data(content, style, custom)

        body = await self.engine.render_named(f"{SPECIALTY_DIR}/{template_name}", data)
        html = await self.engine.render_named(LAYOUT, {**data, "body": body})
        logger.info("Rendered %s template (%d bytes)", template_name, len(html))
        return RenderedSite(html=html, css=style.css, template_name=template_name, style=style)
