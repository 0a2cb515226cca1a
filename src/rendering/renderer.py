# src/rendering/renderer.py - v2
"""Tree-walking interpreter for compiled templates.

Data is only ever looked up and stringified, never evaluated. Variable
values are HTML-escaped unless the tag was triple-stashed.
"""

from __future__ import annotations

import html
from typing import Any, Mapping, Sequence

from medsite.core.errors import RenderError
from medsite.rendering.nodes import (
    CompiledTemplate,
    ConditionalNode,
    LoopNode,
    Node,
    PartialNode,
    TextNode,
    VariableNode,
)

MAX_PARTIAL_DEPTH = 16

_MISSING = object()


def _lookup(value: Any, segment: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(segment, _MISSING)
    if isinstance(value, (list, tuple)) and segment.isdigit():
        index = int(segment)
        return value[index] if index < len(value) else _MISSING
    return _MISSING


class LoopScope(dict):
    """Scope pushed for one ``#each`` item; lookups do not pass through it."""


def resolve(scopes: Sequence[Any], path: tuple[str, ...]) -> Any:
    """Resolve a dotted path against a scope chain, innermost scope first.

    The first segment picks the nearest scope that defines it, but the search
    stops at the innermost loop item: inside ``#each`` a bare name never
    picks up top-level data. ``@root.<path>`` addresses the top-level data
    explicitly. Remaining segments walk mappings and numeric list indexes.
    Missing paths yield None.
    """
    head, rest = path[0], path[1:]
    value: Any = _MISSING
    if head == "@root":
        value = scopes[0] if scopes else _MISSING
    else:
        for scope in reversed(scopes):
            value = _lookup(scope, head)
            if value is not _MISSING or isinstance(scope, LoopScope):
                break
    for segment in rest:
        if value is _MISSING:
            break
        value = _lookup(value, segment)
    return None if value is _MISSING else value


def stringify(value: Any) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "true"
    if isinstance(value, (list, tuple)):
        return ", ".join(stringify(v) for v in value)
    if isinstance(value, Mapping):
        return ""
    return str(value)


def _loop_scope(item: Any, index: int, count: int) -> LoopScope:
    scope = LoopScope(item) if isinstance(item, Mapping) else LoopScope()
    meta = {"this": item, "index": index, "first": index == 0, "last": index == count - 1}
    scope.update(meta)
    scope.update({f"@{k}": v for k, v in meta.items() if k != "this"})
    return scope


class Renderer:
    """Render node trees against a data context.

    ``partials`` maps partial names to templates compiled ahead of time; the
    renderer never loads or parses anything itself.
    """

    def __init__(self, partials: Mapping[str, CompiledTemplate] | None = None) -> None:
        self._partials = dict(partials or {})

    def render(self, template: CompiledTemplate, data: Mapping[str, Any]) -> str:
        out: list[str] = []
        self._walk(template.nodes, [data], out, depth=0)
        return "".join(out)

    def _walk(self, nodes: Sequence[Node], scopes: list[Any], out: list[str], depth: int) -> None:
        for node in nodes:
            if isinstance(node, TextNode):
                out.append(node.text)
            elif isinstance(node, VariableNode):
                text = stringify(resolve(scopes, node.path))
                out.append(text if node.raw else html.escape(text, quote=True))
            elif isinstance(node, ConditionalNode):
                if resolve(scopes, node.path):
                    self._walk(node.body, scopes, out, depth)
            elif isinstance(node, LoopNode):
                items = resolve(scopes, node.path)
                if not isinstance(items, (list, tuple)):
                    continue
                for index, item in enumerate(items):
                    scopes.append(_loop_scope(item, index, len(items)))
                    try:
                        self._walk(node.body, scopes, out, depth)
                    finally:
                        scopes.pop()
            elif isinstance(node, PartialNode):
                self._partial(node.name, scopes, out, depth)
            else:
                raise RenderError(f"Unknown template node {type(node).__name__}")

    def _partial(self, name: str, scopes: list[Any], out: list[str], depth: int) -> None:
        if depth >= MAX_PARTIAL_DEPTH:
            raise RenderError(f"Partial nesting deeper than {MAX_PARTIAL_DEPTH} at {name!r}")
        partial = self._partials.get(name)
        if partial is None:
            raise RenderError(f"Partial {name!r} was not loaded")
        self._walk(partial.nodes, scopes, out, depth + 1)
