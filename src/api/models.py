# src/api/models.py - v2
"""API-level result models returned by the pipeline and the facade."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from medsite.core.models import ClassificationResult, Recommendation, WebsiteContent


class WebsiteResult(BaseModel):
    """Return value of facade.generate_website()."""

    content: WebsiteContent
    html: str
    css: str
    classification: ClassificationResult
    quality_score: float
    fallback_used: bool
    template_name: str
    recommendations: list[Recommendation] = Field(default_factory=list)
    sections: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class SectionResult(BaseModel):
    """Return value of WebsitePipeline.regenerate_section()."""

    section: str
    content: WebsiteContent
    html: str
    css: str
    fallback_used: bool
