# src/llm/adapters/openai_adapter.py - v2
"""OpenAI GPT adapter implementing BaseLLMClient.

Uses the official openai SDK (optional extra: pip install medsite[openai]).
"""

from __future__ import annotations

import time
from typing import Any

from medsite.llm.base_client import BaseLLMClient
from medsite.llm.models import LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    """OpenAI GPT adapter."""

    def __init__(self, model: str = "gpt-4o", api_key: str = "", **kwargs: Any):
        self._model = model
        self._api_key = api_key
        self._timeout_s = kwargs.get("timeout_s")

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 3000,
        temperature: float = 0.7,
    ) -> LLMResponse:
        try:
            import openai
        except ImportError as e:
            raise ImportError("openai package required: pip install openai") from e

        client_kwargs: dict[str, Any] = {"api_key": self._api_key or None, "max_retries": 0}
        if self._timeout_s is not None:
            client_kwargs["timeout"] = self._timeout_s
        client = openai.AsyncOpenAI(**client_kwargs)

        oai_messages: list[dict[str, Any]] = []
        if system:
            oai_messages.append({"role": "system", "content": system})
        for m in messages:
            oai_messages.append({"role": m.role, "content": m.content})

        t0 = time.monotonic()
        resp = await client.chat.completions.create(
            model=self._model,
            messages=oai_messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        latency = int((time.monotonic() - t0) * 1000)

        choice = resp.choices[0]
        usage = resp.usage
        return LLMResponse(
            content=choice.message.content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
            provider="openai",
            latency_ms=latency,
            stop_reason=choice.finish_reason,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "openai"
