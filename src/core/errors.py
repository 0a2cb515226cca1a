# src/core/errors.py - v1
"""Error taxonomy shared across the generation pipeline.

Classification and generation errors are absorbed inside the pipeline and
surface to callers only as ``fallback_used`` / low confidence. Render errors
are fatal for the request and propagate.
"""

from __future__ import annotations

from enum import Enum


class MedsiteError(Exception):
    """Base class for all pipeline errors."""


class ClassificationError(MedsiteError):
    """Internal classifier failure; always degraded to a fallback result."""


class GenerationErrorKind(str, Enum):
    AI_UNAVAILABLE = "ai_unavailable"
    MALFORMED_OUTPUT = "malformed_output"
    RATE_LIMITED = "rate_limited"


class GenerationError(MedsiteError):
    """Content generation failed; recoverable through the fallback engine."""

    def __init__(self, kind: GenerationErrorKind, message: str = "", attempts: int = 0) -> None:
        self.kind = kind
        self.attempts = attempts
        super().__init__(f"{kind.value}: {message}" if message else kind.value)


class ContentValidationError(MedsiteError):
    """Validator invariant violated. Indicates a defect, not bad input."""


class SkeletonNotFoundError(MedsiteError):
    """No template-tier skeleton exists for the requested specialty."""

    def __init__(self, specialty: str) -> None:
        self.specialty = specialty
        super().__init__(f"No fallback skeleton for specialty {specialty!r}")


class RenderError(MedsiteError):
    """Template missing or malformed. Fatal for the request."""


class TemplateSyntaxError(RenderError):
    """Template source could not be parsed."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
