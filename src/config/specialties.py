# src/config/specialties.py - v1
"""Declarative specialty configuration.

Holds the closed set of supported specialties, the keyword lexicon used by
the classifier, free-text aliases, and per-specialty profiles that drive
validator defaults, fallback skeletons and color schemes.

Everything here is built once at import time and exposed read-only.
"""

from __future__ import annotations

import hashlib
import json
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

GENERAL_PRACTICE = "general-practice"

SUPPORTED_SPECIALTIES: tuple[str, ...] = (
    GENERAL_PRACTICE,
    "dentistry",
    "dermatology",
    "cardiology",
    "pediatrics",
    "orthopedics",
    "gynecology",
    "neurology",
    "psychiatry",
    "oncology",
    "ophthalmology",
    "urology",
    "endocrinology",
)

# Iteration order is the classifier tie-break order: on equal scores the
# specialty listed first wins.
SPECIALTY_LEXICON: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "cardiology": (
        "heart", "cardiac", "cardiovascular", "chest pain", "ecg", "ekg",
        "blood pressure", "arrhythmia", "coronary", "hypertension",
        "pacemaker", "stent",
    ),
    "orthopedics": (
        "bone", "joint", "fracture", "spine", "knee", "hip", "shoulder",
        "arthritis", "sports injury", "ligament", "tendon", "cartilage",
        "osteoporosis",
    ),
    "dermatology": (
        "skin", "acne", "rash", "mole", "eczema", "psoriasis", "dermatitis",
        "melanoma", "wrinkles", "botox", "laser", "biopsy",
    ),
    "pediatrics": (
        "child", "children", "infant", "baby", "vaccination", "pediatric",
        "growth", "development", "adolescent", "immunization", "newborn",
    ),
    "gynecology": (
        "women", "pregnancy", "menstrual", "reproductive", "prenatal",
        "obstetric", "gynecological", "fertility", "contraception",
        "menopause",
    ),
    "neurology": (
        "brain", "nerve", "neurological", "seizure", "migraine", "stroke",
        "paralysis", "memory", "alzheimer", "parkinson", "epilepsy",
    ),
    "psychiatry": (
        "mental health", "depression", "anxiety", "therapy", "psychological",
        "bipolar", "adhd", "counseling", "psychiatric", "medication",
    ),
    "oncology": (
        "cancer", "tumor", "chemotherapy", "radiation", "oncology",
        "malignant", "metastasis", "biopsy", "lymphoma", "leukemia",
    ),
    "ophthalmology": (
        "eye", "vision", "glaucoma", "cataract", "retina", "ophthalmology",
        "visual", "glasses", "contact lenses", "surgery",
    ),
    "dentistry": (
        "dental", "teeth", "oral", "cavity", "gum", "root canal",
        "orthodontic", "periodontal", "implant", "crown", "braces",
        "dentist", "dentistry",
    ),
    "urology": (
        "kidney", "bladder", "prostate", "urinary", "stones", "incontinence",
        "erectile", "testosterone", "vasectomy",
    ),
    "endocrinology": (
        "diabetes", "thyroid", "hormone", "insulin", "metabolism",
        "endocrine", "glucose", "adrenal", "pituitary",
    ),
})

SPECIALTY_ALIASES: Mapping[str, str] = MappingProxyType({
    "general practice": GENERAL_PRACTICE,
    "general medicine": GENERAL_PRACTICE,
    "general": GENERAL_PRACTICE,
    "family medicine": GENERAL_PRACTICE,
    "family practice": GENERAL_PRACTICE,
    "primary care": GENERAL_PRACTICE,
    "internal medicine": GENERAL_PRACTICE,
    "dental": "dentistry",
    "dentist": "dentistry",
    "orthodontics": "dentistry",
    "skin": "dermatology",
    "heart": "cardiology",
    "cardiac": "cardiology",
    "children": "pediatrics",
    "pediatric": "pediatrics",
    "paediatrics": "pediatrics",
    "orthopedic": "orthopedics",
    "orthopaedics": "orthopedics",
    "obgyn": "gynecology",
    "ob-gyn": "gynecology",
    "obstetrics": "gynecology",
    "womens health": "gynecology",
    "neurological": "neurology",
    "mental health": "psychiatry",
    "psychology": "psychiatry",
    "cancer": "oncology",
    "eye care": "ophthalmology",
    "optometry": "ophthalmology",
    "urological": "urology",
    "diabetes": "endocrinology",
})


def normalize_specialty(value: object) -> str | None:
    """Map a free-text specialty name onto a supported id.

    Returns None when the value cannot be mapped (callers then auto-detect).
    """
    if not isinstance(value, str):
        return None
    key = re.sub(r"[\s_]+", " ", value.strip().lower()).replace("'", "")
    if not key:
        return None
    hyphenated = key.replace(" ", "-")
    if hyphenated in SUPPORTED_SPECIALTIES:
        return hyphenated
    if key in SPECIALTY_ALIASES:
        return SPECIALTY_ALIASES[key]
    # Lexicon keys also accept the bare word ("cardiology practice")
    for specialty in SUPPORTED_SPECIALTIES:
        if re.search(rf"\b{re.escape(specialty.split('-')[0])}\b", key):
            return specialty
    return None


def lexicon_fingerprint(lexicon: Mapping[str, tuple[str, ...]] = SPECIALTY_LEXICON) -> str:
    """Stable short digest of the lexicon, used to version classification keys."""
    payload = json.dumps([[k, list(v)] for k, v in lexicon.items()])
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]


@dataclass(frozen=True)
class ColorScheme:
    """Base palette for a specialty."""

    primary: str
    secondary: str
    accent: str
    background: str = "#ffffff"
    text: str = "#1f2937"


@dataclass(frozen=True)
class SpecialtyProfile:
    """Static content defaults for one specialty."""

    specialty: str
    display_name: str
    practice_label: str
    site_title: str
    tagline: str
    headline: str
    subheadline: str
    cta_text: str
    about: str
    services: tuple[str, ...]
    seo_keywords: tuple[str, ...]
    colors: ColorScheme

    @property
    def email_domain(self) -> str:
        return f"{self.specialty.replace('-', '')}practice.com"


_DEFAULT_COLORS = ColorScheme(primary="#2563eb", secondary="#64748b", accent="#10b981")

SPECIALTY_PROFILES: Mapping[str, SpecialtyProfile] = MappingProxyType({
    GENERAL_PRACTICE: SpecialtyProfile(
        specialty=GENERAL_PRACTICE,
        display_name="General Practice",
        practice_label="Family Medicine",
        site_title="Family Health Medical Center",
        tagline="Comprehensive Healthcare for Life",
        headline="Your Partner in Health and Wellness",
        subheadline="Providing comprehensive medical care for patients of all ages with personalized attention",
        cta_text="Schedule Appointment",
        about="personalized healthcare services for patients of all ages and medical needs",
        services=(
            "Annual Check-ups", "Preventive Care", "Chronic Disease Management",
            "Health Screenings", "Wellness Programs", "Urgent Care",
        ),
        seo_keywords=("family medicine", "primary care", "healthcare", "medical center", "physician"),
        colors=_DEFAULT_COLORS,
    ),
    "dentistry": SpecialtyProfile(
        specialty="dentistry",
        display_name="Dentistry",
        practice_label="Dental",
        site_title="Bright Smile Dental Care",
        tagline="Healthy Smiles for the Whole Family",
        headline="Gentle, Modern Dental Care",
        subheadline="Preventive, restorative and cosmetic dentistry delivered with comfort in mind",
        cta_text="Book a Dental Visit",
        about="gentle dental care that keeps teeth and gums healthy for life",
        services=(
            "Dental Cleanings", "Teeth Whitening", "Dental Implants",
            "Root Canal Therapy", "Orthodontics", "Emergency Dental Care",
        ),
        seo_keywords=("dentist", "dental care", "teeth cleaning", "dental implants", "family dentistry"),
        colors=ColorScheme(primary="#0ea5e9", secondary="#64748b", accent="#06b6d4"),
    ),
    "dermatology": SpecialtyProfile(
        specialty="dermatology",
        display_name="Dermatology",
        practice_label="Dermatology",
        site_title="SkinCare Dermatology",
        tagline="Healthy Skin, Confident You",
        headline="Expert Dermatological Care for All Ages",
        subheadline="Comprehensive skin care services from medical dermatology to cosmetic treatments",
        cta_text="Schedule Consultation",
        about="expert dermatological care for all your skin, hair, and nail concerns",
        services=(
            "Skin Cancer Screening", "Acne Treatment", "Cosmetic Dermatology",
            "Psoriasis Care", "Mole Removal", "Laser Treatments",
        ),
        seo_keywords=("dermatology", "skin care", "acne treatment", "skin cancer screening", "cosmetic dermatology"),
        colors=ColorScheme(primary="#ec4899", secondary="#64748b", accent="#f97316"),
    ),
    "cardiology": SpecialtyProfile(
        specialty="cardiology",
        display_name="Cardiology",
        practice_label="Cardiology",
        site_title="Heart Care Medical Center",
        tagline="Your Heart Health is Our Priority",
        headline="Expert Cardiac Care You Can Trust",
        subheadline="Comprehensive cardiovascular services with advanced technology and compassionate care",
        cta_text="Schedule Consultation",
        about="comprehensive cardiac care with state-of-the-art technology and personalized treatment plans",
        services=(
            "Cardiac Consultation", "ECG/EKG Testing", "Stress Testing",
            "Heart Disease Prevention", "Blood Pressure Management", "Cardiac Catheterization",
        ),
        seo_keywords=("cardiology", "heart care", "cardiac services", "cardiovascular health", "heart specialist"),
        colors=ColorScheme(primary="#dc2626", secondary="#64748b", accent="#ea580c"),
    ),
    "pediatrics": SpecialtyProfile(
        specialty="pediatrics",
        display_name="Pediatrics",
        practice_label="Pediatric",
        site_title="Little Ones Pediatrics",
        tagline="Growing Healthy, Happy Children",
        headline="Compassionate Pediatric Care",
        subheadline="Dedicated to keeping your children healthy and supporting their development every step of the way",
        cta_text="Schedule Visit",
        about="compassionate pediatric care supporting your child's health and development",
        services=(
            "Well-Child Visits", "Vaccinations", "Growth Monitoring",
            "Developmental Assessments", "Sick Child Care", "Adolescent Medicine",
        ),
        seo_keywords=("pediatrics", "child healthcare", "vaccinations", "pediatrician", "children's health"),
        colors=ColorScheme(primary="#7c3aed", secondary="#64748b", accent="#f59e0b"),
    ),
    "orthopedics": SpecialtyProfile(
        specialty="orthopedics",
        display_name="Orthopedics",
        practice_label="Orthopedic",
        site_title="OrthoCare Specialists",
        tagline="Restoring Movement, Rebuilding Lives",
        headline="Expert Orthopedic Care for Active Living",
        subheadline="Specialized treatment for bones, joints, and muscles to get you back to doing what you love",
        cta_text="Book Appointment",
        about="specialized orthopedic care focusing on bone, joint, and musculoskeletal health",
        services=(
            "Joint Replacement", "Sports Medicine", "Fracture Care",
            "Spine Treatment", "Arthritis Management", "Physical Therapy",
        ),
        seo_keywords=("orthopedics", "bone care", "joint replacement", "sports medicine", "spine treatment"),
        colors=ColorScheme(primary="#059669", secondary="#64748b", accent="#d97706"),
    ),
    "gynecology": SpecialtyProfile(
        specialty="gynecology",
        display_name="Gynecology",
        practice_label="Women's Health",
        site_title="Women's Health Partners",
        tagline="Care for Every Stage of Life",
        headline="Trusted Care for Women",
        subheadline="Gynecologic and obstetric care built around your health goals and your family plans",
        cta_text="Schedule Appointment",
        about="attentive women's health care from adolescence through menopause",
        services=(
            "Annual Wellness Exams", "Prenatal Care", "Family Planning",
            "Menopause Management", "Fertility Consultation", "Pelvic Health",
        ),
        seo_keywords=("gynecology", "women's health", "prenatal care", "obgyn", "family planning"),
        colors=ColorScheme(primary="#db2777", secondary="#64748b", accent="#8b5cf6"),
    ),
    "neurology": SpecialtyProfile(
        specialty="neurology",
        display_name="Neurology",
        practice_label="Neurology",
        site_title="Brain and Spine Neurology Center",
        tagline="Advanced Care for the Nervous System",
        headline="Expert Neurological Care",
        subheadline="Diagnosis and treatment of brain, spine and nerve conditions with modern technology",
        cta_text="Request Consultation",
        about="thorough neurological evaluation and treatment for conditions of the brain and nerves",
        services=(
            "Migraine Treatment", "Epilepsy Care", "Stroke Prevention",
            "Memory Disorder Evaluation", "Nerve Conduction Studies", "Movement Disorder Care",
        ),
        seo_keywords=("neurology", "neurologist", "migraine treatment", "epilepsy care", "stroke prevention"),
        colors=ColorScheme(primary="#4f46e5", secondary="#64748b", accent="#0891b2"),
    ),
    "psychiatry": SpecialtyProfile(
        specialty="psychiatry",
        display_name="Psychiatry",
        practice_label="Mental Health",
        site_title="Mindful Mental Health Clinic",
        tagline="Support for Every Step Forward",
        headline="Compassionate Mental Health Care",
        subheadline="Evidence-based psychiatric care and counseling in a safe, confidential setting",
        cta_text="Start Your Care",
        about="compassionate psychiatric care combining therapy and medication management",
        services=(
            "Psychiatric Evaluation", "Medication Management", "Anxiety Treatment",
            "Depression Care", "ADHD Assessment", "Individual Therapy",
        ),
        seo_keywords=("psychiatry", "mental health", "therapy", "anxiety treatment", "depression care"),
        colors=ColorScheme(primary="#0d9488", secondary="#64748b", accent="#6366f1"),
    ),
    "oncology": SpecialtyProfile(
        specialty="oncology",
        display_name="Oncology",
        practice_label="Oncology",
        site_title="Hope Cancer Care Center",
        tagline="Expert Care, Every Step of the Way",
        headline="Personalized Cancer Treatment",
        subheadline="Comprehensive oncology services with a dedicated team that supports patients and families",
        cta_text="Request Consultation",
        about="personalized cancer care that pairs advanced treatment with patient support",
        services=(
            "Cancer Screening", "Chemotherapy", "Radiation Oncology",
            "Immunotherapy", "Survivorship Care", "Patient Navigation",
        ),
        seo_keywords=("oncology", "cancer treatment", "oncologist", "chemotherapy", "cancer care"),
        colors=ColorScheme(primary="#9333ea", secondary="#64748b", accent="#14b8a6"),
    ),
    "ophthalmology": SpecialtyProfile(
        specialty="ophthalmology",
        display_name="Ophthalmology",
        practice_label="Eye Care",
        site_title="Clear Vision Eye Center",
        tagline="See Life Clearly",
        headline="Complete Eye Care for Every Age",
        subheadline="From routine eye exams to advanced surgery, we protect and restore your vision",
        cta_text="Book an Eye Exam",
        about="complete eye care from routine exams to advanced vision surgery",
        services=(
            "Comprehensive Eye Exams", "Cataract Surgery", "Glaucoma Management",
            "Retina Care", "LASIK Consultation", "Contact Lens Fitting",
        ),
        seo_keywords=("ophthalmology", "eye doctor", "cataract surgery", "glaucoma", "eye exam"),
        colors=ColorScheme(primary="#0284c7", secondary="#64748b", accent="#22c55e"),
    ),
    "urology": SpecialtyProfile(
        specialty="urology",
        display_name="Urology",
        practice_label="Urology",
        site_title="Advanced Urology Associates",
        tagline="Discreet, Expert Urologic Care",
        headline="Specialized Urology Care",
        subheadline="Diagnosis and treatment of urinary and kidney conditions with minimally invasive options",
        cta_text="Schedule Appointment",
        about="discreet and expert urologic care for men and women",
        services=(
            "Kidney Stone Treatment", "Prostate Care", "Bladder Health",
            "Incontinence Treatment", "Men's Health", "Vasectomy",
        ),
        seo_keywords=("urology", "urologist", "kidney stones", "prostate care", "bladder health"),
        colors=ColorScheme(primary="#1d4ed8", secondary="#64748b", accent="#f59e0b"),
    ),
    "endocrinology": SpecialtyProfile(
        specialty="endocrinology",
        display_name="Endocrinology",
        practice_label="Endocrinology",
        site_title="Balance Endocrinology Clinic",
        tagline="Restoring Your Body's Balance",
        headline="Expert Hormone and Metabolic Care",
        subheadline="Personalized care for diabetes, thyroid and hormone conditions",
        cta_text="Schedule Consultation",
        about="personalized care for diabetes, thyroid and other hormone conditions",
        services=(
            "Diabetes Management", "Thyroid Care", "Hormone Therapy",
            "Metabolic Disorders", "Osteoporosis Care", "Nutrition Counseling",
        ),
        seo_keywords=("endocrinology", "diabetes care", "thyroid", "hormone therapy", "endocrinologist"),
        colors=ColorScheme(primary="#16a34a", secondary="#64748b", accent="#0ea5e9"),
    ),
})


def get_profile(specialty: str) -> SpecialtyProfile:
    """Return the profile for a specialty, defaulting to general practice."""
    return SPECIALTY_PROFILES.get(specialty, SPECIALTY_PROFILES[GENERAL_PRACTICE])
