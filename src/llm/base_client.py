# src/llm/base_client.py - v2
"""Abstract LLM client interface.

The pipeline treats the model as an opaque text-completion capability:
prompt in, text out, with throttling, timeouts and garbage as failure modes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from medsite.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for all LLM providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 3000,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Text completion."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (anthropic, openai)."""
