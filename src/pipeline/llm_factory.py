# src/pipeline/llm_factory.py - v2
"""LLM factory: per-component LLM clients using config routing.

Resolves provider:model for each component via the cascade
(per-component -> default -> fallback) and instantiates the adapter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from medsite.llm.client_factory import create_llm_client
from medsite.llm.config import resolve_llm

if TYPE_CHECKING:
    from medsite.config.settings import Settings
    from medsite.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


class LLMFactory:
    """Create and cache LLM clients per component.

    Clients are cached by (provider, model) key so components sharing
    the same assignment reuse a single client instance.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._clients: dict[str, BaseLLMClient] = {}

    def get_client(self, component: str) -> BaseLLMClient:
        assignment = resolve_llm(component, self._settings)
        cache_key = assignment.key

        if cache_key not in self._clients:
            self._clients[cache_key] = create_llm_client(
                assignment.provider, assignment.model, self._settings
            )
            logger.info(
                "Created LLM client for '%s': %s (source: %s)",
                component, cache_key, assignment.source,
            )
        else:
            logger.debug("Reusing cached LLM client for '%s': %s", component, cache_key)

        return self._clients[cache_key]

    def __call__(self, component: str) -> BaseLLMClient:
        return self.get_client(component)
