# src/rendering/engine.py - v1
"""Template engine: compile, cache and render.

Compilation parses the source into an immutable node tree. Compiled trees
are stored in the templates cache region under the hash of the source, so
identical sources share a single tree. Partials are resolved statically
before rendering starts; a partial cycle or a missing partial fails the
render up front.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Mapping

from medsite.cache.generation_cache import GenerationCache
from medsite.cache.keys import Region, template_key
from medsite.core.errors import RenderError
from medsite.rendering.nodes import CompiledTemplate
from medsite.rendering.parser import parse
from medsite.rendering.renderer import MAX_PARTIAL_DEPTH, Renderer
from medsite.rendering.store import TemplateStore

logger = logging.getLogger(__name__)

PARTIALS_DIR = "partials"


class TemplateEngine:
    """Compile and render logic-less HTML templates."""

    def __init__(
        self,
        store: TemplateStore | None = None,
        cache: GenerationCache | None = None,
    ) -> None:
        self.store = store or TemplateStore()
        self.cache = cache

    async def compile(self, source: str) -> CompiledTemplate:
        """Parse ``source``, reusing a cached tree when one exists.

        Raises:
            TemplateSyntaxError: Source is malformed.
        """
        key = template_key(source)
        if self.cache is not None:
            cached = await self.cache.get(Region.TEMPLATES, key)
            if isinstance(cached, CompiledTemplate):
                return cached

        nodes, partials = parse(source)
        compiled = CompiledTemplate(
            nodes=nodes,
            source_hash=hashlib.sha256(source.encode("utf-8")).hexdigest(),
            partials=partials,
        )
        logger.debug("Compiled template %s (%d nodes)", compiled.source_hash[:12], len(nodes))

        if self.cache is not None:
            await self.cache.set(Region.TEMPLATES, key, compiled)
        return compiled

    async def compile_named(self, name: str) -> CompiledTemplate:
        return await self.compile(self.store.load(name))

    async def resolve_partials(self, template: CompiledTemplate) -> dict[str, CompiledTemplate]:
        """Load and compile every partial reachable from ``template``.

        Raises:
            RenderError: Missing partial, cycle, or nesting too deep.
        """
        resolved: dict[str, CompiledTemplate] = {}

        async def visit(current: CompiledTemplate, chain: tuple[str, ...]) -> None:
            for name in sorted(current.partials):
                if name in chain:
                    cycle = " -> ".join((*chain, name))
                    raise RenderError(f"Partial cycle: {cycle}")
                if len(chain) >= MAX_PARTIAL_DEPTH:
                    raise RenderError(f"Partial nesting deeper than {MAX_PARTIAL_DEPTH} at {name!r}")
                if name not in resolved:
                    resolved[name] = await self.compile_named(f"{PARTIALS_DIR}/{name}")
                await visit(resolved[name], (*chain, name))

        await visit(template, ())
        return resolved

    async def render_compiled(self, template: CompiledTemplate, data: Mapping[str, Any]) -> str:
        partials = await self.resolve_partials(template)
        return Renderer(partials).render(template, data)

    async def render(self, source: str, data: Mapping[str, Any]) -> str:
        """Compile ``source`` (cached) and render it against ``data``.

        Raises:
            RenderError: Malformed template or unresolvable partial.
        """
        return await self.render_compiled(await self.compile(source), data)

    async def render_named(self, name: str, data: Mapping[str, Any]) -> str:
        return await self.render(self.store.load(name), data)
