# src/classification/ai_classifier.py - v1
"""LLM-backed specialty classifier.

Asks the model to pick one identifier from the closed specialty set and
answer in JSON. Falls back to a regex over the raw answer when the JSON is
unusable. Answers that do not map onto a supported specialty are dropped.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from medsite.config.specialties import SUPPORTED_SPECIALTIES, normalize_specialty
from medsite.core.errors import ClassificationError
from medsite.core.models import AISignal
from medsite.llm.models import Message
from medsite.llm.retry import LLMRetryExhausted, RetryConfig, build_retry_configs, with_retry

if TYPE_CHECKING:
    from medsite.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

_PROMPT_PATH = Path(__file__).parent / "prompts" / "specialty.txt"
_SPECIALTY_RE = re.compile(r"""specialty["'\s]*:\s*["']?([^"',\n}]+)""", re.IGNORECASE)

DEFAULT_JSON_CONFIDENCE = 0.6
REGEX_CONFIDENCE = 0.5


class AISpecialtyClassifier:
    """Classify a practice description with an LLM."""

    def __init__(
        self,
        llm: BaseLLMClient,
        max_tokens: int = 300,
        temperature: float = 0.0,
        timeout_s: float = 20.0,
        retry_configs: dict[str, RetryConfig] | None = None,
    ) -> None:
        self._llm = llm
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout_s = timeout_s
        self._retry_configs = retry_configs or build_retry_configs(1, 0.5)
        self._prompt_template: str | None = None

    @property
    def prompt_file(self) -> str:
        return str(_PROMPT_PATH)

    def _load_prompt(self) -> str:
        if self._prompt_template is None:
            self._prompt_template = _PROMPT_PATH.read_text(encoding="utf-8")
        return self._prompt_template

    def _format_prompt(self, text: str) -> str:
        return self._load_prompt().format(
            description=text.strip(),
            specialties="\n".join(f"- {s}" for s in SUPPORTED_SPECIALTIES),
        )

    async def _call(self, prompt: str):
        return await asyncio.wait_for(
            self._llm.complete(
                messages=[Message(role="user", content=prompt)],
                system=(
                    "You are a medical practice classifier. "
                    "Respond only with valid JSON."
                ),
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            ),
            timeout=self._timeout_s,
        )

    async def classify(self, text: str) -> AISignal | None:
        """Return the model's specialty signal, or None if the answer is unusable.

        Raises:
            ClassificationError: If the LLM could not be reached.
        """
        prompt = self._format_prompt(text)
        try:
            response = await with_retry(
                self._call, prompt, agent="classifier", retry_configs=self._retry_configs,
            )
        except LLMRetryExhausted as exc:
            raise ClassificationError(str(exc)) from exc
        return self.parse_response(response.content)

    def parse_response(self, content: str) -> AISignal | None:
        """Parse a raw model answer into an AISignal."""
        parsed = _parse_json_object(content)
        if parsed is not None:
            specialty = normalize_specialty(parsed.get("specialty"))
            if specialty is not None:
                return AISignal(
                    specialty=specialty,
                    confidence=_clamp_confidence(parsed.get("confidence")),
                    rationale=str(parsed.get("rationale") or parsed.get("reasoning") or ""),
                    parse_mode="json",
                )

        match = _SPECIALTY_RE.search(content or "")
        if match:
            specialty = normalize_specialty(match.group(1))
            if specialty is not None:
                return AISignal(
                    specialty=specialty,
                    confidence=REGEX_CONFIDENCE,
                    rationale="Parsed from text response",
                    parse_mode="regex",
                )

        logger.warning("Unusable classifier answer: %.120r", content)
        return None


def _parse_json_object(content: str) -> dict[str, Any] | None:
    text = (content or "").strip()
    if text.startswith("```"):
        lines = [ln for ln in text.split("\n") if not ln.strip().startswith("```")]
        text = "\n".join(lines)
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _clamp_confidence(value: Any) -> float:
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return DEFAULT_JSON_CONFIDENCE
    if confidence != confidence:  # NaN
        return DEFAULT_JSON_CONFIDENCE
    return max(0.0, min(confidence, 1.0))
