# src/generation/generator.py - v2
"""Content generator: prompt the LLM for structured website copy.

Transient failures are retried with exponential backoff (llm/retry.py)
and each call is bounded by a timeout. Exhaustion raises
GenerationError(AI_UNAVAILABLE), or RATE_LIMITED when every attempt was
throttled. Output that is not a JSON object raises MALFORMED_OUTPUT; the
generator never hands partial data downstream.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from medsite.config.specialties import get_profile
from medsite.core.errors import GenerationError, GenerationErrorKind
from medsite.llm.models import LLMResponse, Message
from medsite.llm.retry import LLMRetryExhausted, RetryConfig, build_retry_configs, with_retry

if TYPE_CHECKING:
    from medsite.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

_PROMPT_DIR = Path(__file__).parent / "prompts"

SECTIONS: dict[str, str] = {
    "hero": (
        '{\n  "headline": "Compelling main headline",\n'
        '  "subheadline": "Supporting sentence that builds trust",\n'
        '  "ctaText": "Action button text"\n}'
    ),
    "about": (
        '{\n  "title": "About section title",\n'
        '  "content": "Two or three paragraphs about the practice",\n'
        '  "highlights": ["highlight 1", "highlight 2", "highlight 3"]\n}'
    ),
    "services": (
        '[\n  {"name": "Service name", "description": "Service description", '
        '"icon": "icon-name"}\n]'
    ),
}

_SYSTEM_PROMPT = (
    "You write website copy for medical practices. "
    "Respond only with valid JSON."
)


class ContentGenerator:
    """Generate raw structured website content for a practice."""

    def __init__(
        self,
        llm: BaseLLMClient,
        max_tokens: int = 3000,
        temperature: float = 0.7,
        timeout_s: float = 60.0,
        retry_configs: dict[str, RetryConfig] | None = None,
    ) -> None:
        self._llm = llm
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout_s = timeout_s
        self._retry_configs = retry_configs or build_retry_configs(3, 1.0)
        self._prompts: dict[str, str] = {}

    def _load_prompt(self, name: str) -> str:
        if name not in self._prompts:
            self._prompts[name] = (_PROMPT_DIR / f"{name}.txt").read_text(encoding="utf-8")
        return self._prompts[name]

    def build_prompt(self, raw_text: str, specialty: str) -> str:
        return self._load_prompt("website_content").format(
            specialty_name=get_profile(specialty).display_name.lower(),
            description=raw_text.strip(),
        )

    async def generate(self, raw_text: str, specialty: str) -> dict[str, Any]:
        """Return the parsed JSON object produced by the model.

        Raises:
            GenerationError: AI_UNAVAILABLE, RATE_LIMITED or MALFORMED_OUTPUT.
        """
        prompt = self.build_prompt(raw_text, specialty)
        prompt_hash = hashlib.sha256(prompt.encode()).hexdigest()[:16]
        response = await self._complete(prompt, agent="generator")

        logger.info(
            "Generated content for %s (prompt=%s, tokens=%d/%d, %dms)",
            specialty, prompt_hash, response.input_tokens, response.output_tokens,
            response.latency_ms,
        )
        if response.truncated:
            logger.warning("Generation hit the output token bound (%d)", self._max_tokens)

        parsed = parse_json(response.content)
        if not isinstance(parsed, dict):
            raise GenerationError(
                GenerationErrorKind.MALFORMED_OUTPUT, "expected a JSON object"
            )
        return parsed

    async def regenerate_section(
        self, raw_text: str, specialty: str, section: str
    ) -> dict[str, Any] | list[Any]:
        """Regenerate one section ("hero", "about" or "services").

        Raises:
            ValueError: Unknown section name.
            GenerationError: As for generate().
        """
        if section not in SECTIONS:
            raise ValueError(
                f"Unknown section {section!r}. Available: {', '.join(SECTIONS)}"
            )
        prompt = self._load_prompt("section").format(
            section=section,
            specialty_name=get_profile(specialty).display_name.lower(),
            description=raw_text.strip(),
            schema=SECTIONS[section],
        )
        response = await self._complete(prompt, agent=f"generator.{section}")
        parsed = parse_json(response.content)

        if section == "services":
            if isinstance(parsed, dict) and isinstance(parsed.get("services"), list):
                parsed = parsed["services"]
            if not isinstance(parsed, list):
                raise GenerationError(
                    GenerationErrorKind.MALFORMED_OUTPUT, "expected a JSON array of services"
                )
            return parsed

        if not isinstance(parsed, dict):
            raise GenerationError(GenerationErrorKind.MALFORMED_OUTPUT, "expected a JSON object")
        return parsed

    async def _call(self, prompt: str) -> LLMResponse:
        return await asyncio.wait_for(
            self._llm.complete(
                messages=[Message(role="user", content=prompt)],
                system=_SYSTEM_PROMPT,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            ),
            timeout=self._timeout_s,
        )

    async def _complete(self, prompt: str, agent: str) -> LLMResponse:
        try:
            return await with_retry(
                self._call, prompt, agent=agent, retry_configs=self._retry_configs,
            )
        except LLMRetryExhausted as exc:
            throttled = all(t == "rate_limit" for t in exc.error_history)
            kind = (
                GenerationErrorKind.RATE_LIMITED
                if throttled
                else GenerationErrorKind.AI_UNAVAILABLE
            )
            logger.error("LLM call failed for %s: %s", agent, exc)
            raise GenerationError(kind, str(exc.last_error), attempts=exc.attempts) from exc


def parse_json(content: str) -> Any:
    """Parse a model answer, tolerating code fences and surrounding prose.

    Raises:
        GenerationError: MALFORMED_OUTPUT when no JSON value can be decoded.
    """
    text = (content or "").strip()
    if text.startswith("```"):
        lines = [ln for ln in text.split("\n") if not ln.strip().startswith("```")]
        text = "\n".join(lines).strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Cut to the outermost object or array
    for open_ch, close_ch in (("{", "}"), ("[", "]")):
        start, end = text.find(open_ch), text.rfind(close_ch)
        if start != -1 and end > start:
            try:
                return json.loads(text[start : end + 1])
            except json.JSONDecodeError:
                continue

    raise GenerationError(GenerationErrorKind.MALFORMED_OUTPUT, "response is not valid JSON")
