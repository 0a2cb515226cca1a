# src/validation/validator.py - v1
"""Content validator/enhancer.

Turns whatever the generator produced (possibly None, partial or of the
wrong types) into a complete WebsiteContent. Every field that is missing or
out of bounds is replaced by a specialty-parameterized default, so
validate() always succeeds for any input.

The quality score is computed on the raw input, before repair, and is
informational only.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from medsite.config.specialties import SpecialtyProfile, get_profile
from medsite.core.errors import ContentValidationError
from medsite.core.models import (
    AboutSection,
    ContactInfo,
    HeroSection,
    SeoMeta,
    Service,
    WebsiteContent,
)
from medsite.validation.sanitize import (
    is_valid_email,
    is_valid_phone,
    sanitize_text,
    truncate,
)

logger = logging.getLogger(__name__)

TITLE_MIN, TITLE_MAX = 10, 100
SERVICES_MIN, SERVICES_MAX = 3, 10
ABOUT_MIN = 100
HIGHLIGHTS_MIN, HIGHLIGHTS_MAX = 3, 6
SEO_TITLE_MIN, SEO_TITLE_MAX = 10, 60
SEO_DESC_MIN, SEO_DESC_MAX = 50, 160
KEYWORDS_MIN, KEYWORDS_MAX = 3, 15

DEFAULT_CTA = "Schedule Appointment"
DEFAULT_ICON = "medical-icon"
DEFAULT_PHONE = "(555) 123-4567"
DEFAULT_ADDRESS = "123 Medical Center Drive, Healthcare City, HC 12345"
DEFAULT_HOURS = "Monday-Friday: 9:00 AM - 5:00 PM"
DEFAULT_HIGHLIGHTS = (
    "Experienced Medical Team",
    "Advanced Medical Technology",
    "Patient-Centered Approach",
    "Comprehensive Care",
)
GENERIC_SERVICES = (
    "Consultations",
    "Preventive Care",
    "Follow-up Visits",
    "Health Screenings",
)

_ICON_RE = re.compile(r"^[a-z0-9][a-z0-9-]{0,39}$")

_MEDICAL_TERMS = (
    "medical", "health", "doctor", "patient", "treatment", "diagnosis",
    "medicine", "clinic", "hospital", "therapy", "care", "practice",
    "specialist", "physician", "nurse", "consultation",
)
_DETAIL_TERMS = (
    "specialize", "expert", "experienced", "years", "certified", "board",
    "fellowship", "trained", "education", "university",
)
_MARKUP_RE = re.compile(
    r"javascript:|<script|eval\(|document\.cookie|window\.location", re.IGNORECASE
)


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """First present value among camelCase / snake_case spellings."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _unique_strings(values: Iterable[Any]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        text = sanitize_text(value)
        if text and text.casefold() not in seen:
            seen.add(text.casefold())
            out.append(text)
    return out


def quality_score(raw: Any) -> float:
    """Weighted completeness of the raw generator output, in [0, 1].

    title >= 10 chars: 20, services >= 4: 30 (>= 3: 20), about >= 100 chars: 20,
    SEO title and description: 15, contact phone and email: 15.
    """
    data = _as_mapping(raw)
    score = 0

    title = sanitize_text(_pick(data, "websiteTitle", "website_title", "title"))
    if len(title) >= TITLE_MIN:
        score += 20

    services = _as_list(data.get("services"))
    if len(services) >= 4:
        score += 30
    elif len(services) >= 3:
        score += 20

    about = _as_mapping(_pick(data, "aboutSection", "about_section", "about"))
    if len(sanitize_text(about.get("content"))) >= ABOUT_MIN:
        score += 20

    seo = _as_mapping(_pick(data, "seoMeta", "seo_meta", "seo"))
    if sanitize_text(seo.get("title")) and sanitize_text(seo.get("description")):
        score += 15

    contact = _as_mapping(_pick(data, "contactInfo", "contact_info", "contact"))
    if sanitize_text(contact.get("phone")) and sanitize_text(contact.get("email")):
        score += 15

    return round(score / 100, 2)


def content_features(content: WebsiteContent) -> set[str]:
    features: set[str] = set()
    if len(content.services) > 5:
        features.add("comprehensive-services")
    if len(content.about.highlights) > 3:
        features.add("detailed-highlights")
    if len(content.seo.keywords) > 5:
        features.add("seo-optimized")
    if content.hero.headline and content.hero.subheadline:
        features.add("compelling-hero")
    return features


def inspect_input(raw_text: str) -> list[str]:
    """Non-fatal warnings about a practice description."""
    text = (raw_text or "").strip()
    if not text:
        return ["Practice description is empty; generic content will be used"]

    warnings: list[str] = []
    lowered = text.lower()
    if len(text) < 50:
        warnings.append("Short description may result in generic content")
    if len(text) > 10_000:
        warnings.append("Description exceeds 10,000 characters")
    if _MARKUP_RE.search(text):
        warnings.append("Description contains script or markup fragments that will be stripped")
    if not any(term in lowered for term in _MEDICAL_TERMS):
        warnings.append("Description does not mention medical or healthcare terms")
    if not any(term in lowered for term in _DETAIL_TERMS):
        warnings.append("Adding specific details about expertise may improve content quality")
    return warnings


class ContentValidator:
    """Repair raw generator output into a complete WebsiteContent."""

    def validate(self, raw: Any, specialty: str) -> WebsiteContent:
        """Return a structurally complete WebsiteContent for any ``raw`` input.

        Raises:
            ContentValidationError: Only if a repair rule itself is defective.
        """
        profile = get_profile(specialty)
        data = _as_mapping(raw)
        if raw is not None and not isinstance(raw, Mapping):
            logger.warning("Discarding non-object content of type %s", type(raw).__name__)

        try:
            content = WebsiteContent(
                title=self.title(_pick(data, "websiteTitle", "website_title", "title"), profile),
                tagline=self.tagline(data.get("tagline"), profile),
                hero=self.hero(_pick(data, "heroSection", "hero_section", "hero"), profile),
                about=self.about(_pick(data, "aboutSection", "about_section", "about"), profile),
                services=self.services(data.get("services"), profile),
                contact=self.contact(_pick(data, "contactInfo", "contact_info", "contact"), profile),
                seo=self.seo(_pick(data, "seoMeta", "seo_meta", "seo"), profile),
                specialty=specialty,
                quality_score=quality_score(data),
                fallback_used=False,
                generation_method="ai",
            )
        except ValidationError as exc:
            raise ContentValidationError(f"Repaired content violates its contract: {exc}") from exc

        content.content_features = content_features(content)
        return content

    # --- Field rules ---

    @staticmethod
    def title(value: Any, profile: SpecialtyProfile) -> str:
        title = sanitize_text(value)
        if len(title) < TITLE_MIN:
            return profile.site_title
        return truncate(title, TITLE_MAX)

    @staticmethod
    def tagline(value: Any, profile: SpecialtyProfile) -> str:
        tagline = sanitize_text(value)
        return truncate(tagline, 200) if tagline else profile.tagline

    @staticmethod
    def hero(value: Any, profile: SpecialtyProfile) -> HeroSection:
        data = _as_mapping(value)
        headline = sanitize_text(data.get("headline"))
        subheadline = sanitize_text(data.get("subheadline"))
        cta = sanitize_text(_pick(data, "ctaText", "cta_text", "cta"))
        return HeroSection(
            headline=truncate(headline, 120) if len(headline) >= 5
            else f"Expert {profile.practice_label} Care",
            subheadline=truncate(subheadline, 300) if len(subheadline) >= 10
            else profile.subheadline,
            cta_text=truncate(cta, 40) if cta else DEFAULT_CTA,
        )

    @staticmethod
    def about(value: Any, profile: SpecialtyProfile) -> AboutSection:
        data = _as_mapping(value)
        title = sanitize_text(data.get("title"))
        body = sanitize_text(data.get("content"))
        if len(body) < ABOUT_MIN:
            body = (
                f"Our {profile.practice_label.lower()} practice provides {profile.about}. "
                "We combine years of experience with modern medical technology to "
                "deliver the best possible outcomes for every patient."
            )
        highlights = _unique_strings(_as_list(data.get("highlights")))
        if len(highlights) < HIGHLIGHTS_MIN:
            highlights += [h for h in DEFAULT_HIGHLIGHTS if h not in highlights]
        return AboutSection(
            title=title if len(title) >= 5 else "About Our Practice",
            content=body,
            highlights=highlights[:HIGHLIGHTS_MAX],
        )

    @staticmethod
    def services(value: Any, profile: SpecialtyProfile) -> list[Service]:
        services: list[Service] = []
        seen: set[str] = set()

        for item in _as_list(value):
            if isinstance(item, str):
                item = {"name": item}
            data = _as_mapping(item)
            name = truncate(sanitize_text(data.get("name")), 80)
            if len(name) < 2 or name.casefold() in seen:
                continue
            description = sanitize_text(data.get("description"))
            if len(description) < 10:
                description = f"Professional {name.lower()} services tailored to your needs"
            icon = sanitize_text(data.get("icon")).lower().replace(" ", "-")
            services.append(Service(
                name=name,
                description=truncate(description, 300),
                icon=icon if _ICON_RE.match(icon) else DEFAULT_ICON,
            ))
            seen.add(name.casefold())

        for name in (*profile.services, *GENERIC_SERVICES):
            if len(services) >= SERVICES_MIN:
                break
            if name.casefold() in seen:
                continue
            services.append(Service(
                name=name,
                description=f"Professional {name.lower()} services tailored to your needs",
                icon=DEFAULT_ICON,
            ))
            seen.add(name.casefold())

        return services[:SERVICES_MAX]

    @staticmethod
    def contact(value: Any, profile: SpecialtyProfile) -> ContactInfo:
        data = _as_mapping(value)
        phone = sanitize_text(data.get("phone"))
        email = sanitize_text(data.get("email"))
        address = sanitize_text(data.get("address"))
        hours = sanitize_text(data.get("hours"))
        return ContactInfo(
            phone=phone if phone and is_valid_phone(phone) else DEFAULT_PHONE,
            email=email if email and is_valid_email(email) else f"info@{profile.email_domain}",
            address=truncate(address, 200) if len(address) >= 10 else DEFAULT_ADDRESS,
            hours=truncate(hours, 200) if hours else DEFAULT_HOURS,
        )

    @staticmethod
    def seo(value: Any, profile: SpecialtyProfile) -> SeoMeta:
        data = _as_mapping(value)
        title = sanitize_text(data.get("title"))
        if len(title) < SEO_TITLE_MIN:
            title = f"{profile.display_name} Specialist - Expert Medical Care"
        description = sanitize_text(data.get("description"))
        if len(description) < SEO_DESC_MIN:
            description = (
                f"Professional {profile.display_name.lower()} services providing expert "
                "medical care with a personalized approach. Schedule your appointment today."
            )
        keywords = _unique_strings(_as_list(data.get("keywords")))
        if len(keywords) < KEYWORDS_MIN:
            keywords += [k for k in profile.seo_keywords if k not in keywords]
        return SeoMeta(
            title=truncate(title, SEO_TITLE_MAX),
            description=truncate(description, SEO_DESC_MAX),
            keywords=keywords[:KEYWORDS_MAX],
        )
