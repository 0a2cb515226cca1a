# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings: LLM routing,
classifier thresholds, cache backends and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM PROVIDERS ===
    llm_default_provider: str = "anthropic"
    llm_default_model: str = "claude-sonnet-4-20250514"

    # Provider API keys
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # Per-component LLM assignment (highest priority), "provider:model"
    llm_classifier: str = ""
    llm_generator: str = ""

    # === Generation ===
    generation_temperature: float = 0.7
    generation_max_tokens: int = 3000
    generation_timeout_s: float = 60.0
    generation_max_retries: int = 3
    generation_retry_base_delay_s: float = 1.0

    # === Classification ===
    classifier_max_tokens: int = 300
    classifier_temperature: float = 0.0
    classifier_timeout_s: float = 20.0
    classifier_ai_enabled: bool = True
    keyword_confidence_threshold: float = 0.7
    keyword_confidence_scale: float = 50.0
    fallback_confidence: float = 0.3
    default_specialty: str = "general-practice"

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["memory", "json", "redis"] = "memory"
    cache_root: Path = Path("~/.medsite/cache")
    cache_redis_url: str = ""
    cache_classification_ttl_s: int = 7200
    cache_content_ttl_s: int = 3600
    cache_templates_ttl_s: int = 0
    cache_max_entries: int = 1000

    # === Templates ===
    templates_dir: Path | None = None

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator(
        "cache_classification_ttl_s", "cache_content_ttl_s", "cache_templates_ttl_s"
    )
    @classmethod
    def validate_ttl(cls, v: int) -> int:  # noqa: N805
        """TTL of 0 means no expiry; negative values are rejected."""
        if v < 0:
            raise ValueError("cache TTL must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if not 0.0 < self.keyword_confidence_threshold <= 1.0:
            errors.append("KEYWORD_CONFIDENCE_THRESHOLD must be in (0, 1]")

        if self.keyword_confidence_scale <= 0:
            errors.append("KEYWORD_CONFIDENCE_SCALE must be > 0")

        if not 0.0 <= self.fallback_confidence < self.keyword_confidence_threshold:
            errors.append(
                "FALLBACK_CONFIDENCE must be >= 0 and below KEYWORD_CONFIDENCE_THRESHOLD"
            )

        if self.generation_max_retries < 0:
            errors.append("GENERATION_MAX_RETRIES must be >= 0")

        if self.cache_max_entries <= 0:
            errors.append("CACHE_MAX_ENTRIES must be > 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-request config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
