# src/llm/models.py - v2
"""LLM-specific types: Message, LLMResponse."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class Message(BaseModel):
    """Single message in a conversation."""

    role: Literal["user", "assistant", "system"]
    content: str


class LLMResponse(BaseModel):
    """Normalized response from any LLM provider."""

    content: str
    input_tokens: int
    output_tokens: int
    model: str
    provider: str
    latency_ms: int
    stop_reason: str | None = None
    raw_response: Any = None

    @property
    def truncated(self) -> bool:
        """True when the provider stopped because of the output token bound."""
        return self.stop_reason in ("max_tokens", "length")
