# src/fallback/skeletons.py - v1
"""Static content skeletons for the two fallback tiers.

Every call builds a new object, so personalizing one skeleton never leaks
into the next request.
"""

from __future__ import annotations

from medsite.config.specialties import GENERAL_PRACTICE, SPECIALTY_PROFILES
from medsite.core.errors import SkeletonNotFoundError
from medsite.core.models import (
    AboutSection,
    ContactInfo,
    HeroSection,
    SeoMeta,
    Service,
    WebsiteContent,
)
from medsite.validation.sanitize import truncate
from medsite.validation.validator import (
    DEFAULT_ADDRESS,
    DEFAULT_HIGHLIGHTS,
    DEFAULT_HOURS,
    DEFAULT_PHONE,
    content_features,
)

TEMPLATE_QUALITY = 0.6
EMERGENCY_QUALITY = 0.3


def template_skeleton(specialty: str) -> WebsiteContent:
    """Specialty skeleton for the template tier.

    Raises:
        SkeletonNotFoundError: No profile exists for ``specialty``.
    """
    profile = SPECIALTY_PROFILES.get(specialty)
    if profile is None:
        raise SkeletonNotFoundError(specialty)

    label = profile.practice_label
    content = WebsiteContent(
        title=profile.site_title,
        tagline=profile.tagline,
        hero=HeroSection(
            headline=profile.headline,
            subheadline=profile.subheadline,
            cta_text=profile.cta_text,
        ),
        about=AboutSection(
            title=f"About Our {label} Practice",
            content=(
                f"Our {label.lower()} practice is dedicated to {profile.about}. "
                "We combine years of experience with the latest medical technologies "
                "to ensure the best possible outcomes for our patients."
            ),
            highlights=list(DEFAULT_HIGHLIGHTS),
        ),
        services=[
            Service(
                name=name,
                description=f"Professional {name.lower()} services delivered with expertise and care",
            )
            for name in profile.services
        ],
        contact=ContactInfo(
            phone=DEFAULT_PHONE,
            email=f"info@{profile.email_domain}",
            address=DEFAULT_ADDRESS,
            hours=DEFAULT_HOURS,
        ),
        seo=SeoMeta(
            title=truncate(f"{profile.site_title} - {profile.display_name}", 60),
            description=truncate(
                f"{profile.site_title} offers {profile.about}. "
                "Schedule your appointment today.",
                160,
            ),
            keywords=list(profile.seo_keywords),
        ),
        specialty=specialty,
        quality_score=TEMPLATE_QUALITY,
        fallback_used=True,
        generation_method="template_fallback",
    )
    content.content_features = content_features(content)
    return content


def emergency_content(specialty: str | None = None) -> WebsiteContent:
    """Specialty-agnostic last-resort content.

    Only the ``specialty`` tag varies; the copy is the same for everyone.
    """
    content = WebsiteContent(
        title="Medical Practice",
        tagline="Professional Healthcare Services",
        hero=HeroSection(
            headline="Professional Medical Care",
            subheadline="Quality healthcare services tailored to your needs",
            cta_text="Schedule Appointment",
        ),
        about=AboutSection(
            title="About Our Practice",
            content=(
                "We are dedicated to providing comprehensive medical care with a focus "
                "on patient-centered treatment and personalized healthcare solutions."
            ),
            highlights=[
                "Licensed medical professionals",
                "Comprehensive health services",
                "Patient-centered care",
                "Modern medical facilities",
            ],
        ),
        services=[
            Service(
                name="Medical Consultation",
                description="Comprehensive medical evaluation and consultation",
                icon="medical-icon",
            ),
            Service(
                name="Health Screening",
                description="Preventive health screenings and check-ups",
                icon="screening-icon",
            ),
            Service(
                name="Treatment Planning",
                description="Personalized treatment plans for optimal health outcomes",
                icon="treatment-icon",
            ),
        ],
        contact=ContactInfo(
            phone="(555) 000-0000",
            email="info@medicalpractice.com",
            address="Medical Center, Healthcare City, HC 00000",
            hours="Mon-Fri: 9:00 AM - 5:00 PM",
        ),
        seo=SeoMeta(
            title="Medical Practice - Professional Healthcare Services",
            description=(
                "Professional medical practice offering comprehensive healthcare "
                "services with experienced medical professionals."
            ),
            keywords=[
                "medical practice", "healthcare", "medical services",
                "physician", "medical care",
            ],
        ),
        specialty=specialty or GENERAL_PRACTICE,
        quality_score=EMERGENCY_QUALITY,
        fallback_used=True,
        generation_method="emergency_fallback",
    )
    content.content_features = content_features(content)
    return content
