# src/rendering/parser.py - v1
"""Template parser: source text -> tuple of AST nodes.

Supported tags:
    {{path.to.value}}       escaped variable
    {{{path.to.value}}}     raw variable
    {{#if path}}...{{/if}}
    {{#each path}}...{{/each}}
    {{> partial-name}}
    {{! comment}}

Anything else inside braces, including ``{{else}}``, is a syntax error.
"""

from __future__ import annotations

import re

from medsite.core.errors import TemplateSyntaxError
from medsite.rendering.nodes import (
    ConditionalNode,
    LoopNode,
    Node,
    PartialNode,
    TextNode,
    VariableNode,
)

_TAG_RE = re.compile(r"\{\{\{(.*?)\}\}\}|\{\{(.*?)\}\}", re.DOTALL)
_PATH_RE = re.compile(r"^(?:\.|@?[A-Za-z_][\w-]*(?:\.[\w-]+)*)$")
_PARTIAL_RE = re.compile(r"^[A-Za-z0-9_-]+(?:/[A-Za-z0-9_-]+)*$")

_BLOCKS = {"if": ConditionalNode, "each": LoopNode}


def parse_path(expr: str, position: int) -> tuple[str, ...]:
    expr = expr.strip()
    if not _PATH_RE.match(expr):
        raise TemplateSyntaxError(f"Invalid variable path {expr!r}", position)
    if expr == ".":
        return ("this",)
    return tuple(expr.split("."))


class _Frame:
    """Open block on the parser stack."""

    def __init__(self, kind: str, path: tuple[str, ...], position: int) -> None:
        self.kind = kind
        self.path = path
        self.position = position
        self.children: list[Node] = []


def parse(source: str) -> tuple[tuple[Node, ...], frozenset[str]]:
    """Parse ``source`` into nodes and the set of partial names it references.

    Raises:
        TemplateSyntaxError: Unbalanced or unknown block tags, bad paths.
    """
    root: list[Node] = []
    stack: list[_Frame] = []
    partials: set[str] = set()
    pos = 0

    def emit(node: Node) -> None:
        (stack[-1].children if stack else root).append(node)

    for match in _TAG_RE.finditer(source):
        if match.start() > pos:
            emit(TextNode(source[pos : match.start()]))
        pos = match.end()
        at = match.start()

        if match.group(1) is not None:
            emit(VariableNode(parse_path(match.group(1), at), raw=True))
            continue

        tag = match.group(2).strip()
        if not tag:
            raise TemplateSyntaxError("Empty tag", at)

        head = tag[0]
        if head == "!":
            continue

        if head == "#":
            parts = tag[1:].split(None, 1)
            kind = parts[0] if parts else ""
            if kind not in _BLOCKS:
                raise TemplateSyntaxError(f"Unsupported block helper {kind!r}", at)
            if len(parts) < 2:
                raise TemplateSyntaxError(f"{{{{#{kind}}}}} needs a path", at)
            stack.append(_Frame(kind, parse_path(parts[1], at), at))
            continue

        if head == "/":
            kind = tag[1:].strip()
            if not stack:
                raise TemplateSyntaxError(f"Unexpected closing tag {{{{/{kind}}}}}", at)
            frame = stack.pop()
            if frame.kind != kind:
                raise TemplateSyntaxError(
                    f"Closing {{{{/{kind}}}}} does not match open {{{{#{frame.kind}}}}}", at
                )
            emit(_BLOCKS[kind](path=frame.path, body=tuple(frame.children)))
            continue

        if head == ">":
            name = tag[1:].strip()
            if not _PARTIAL_RE.match(name):
                raise TemplateSyntaxError(f"Invalid partial name {name!r}", at)
            partials.add(name)
            emit(PartialNode(name))
            continue

        if tag == "else" or head == "^":
            raise TemplateSyntaxError("Else branches are not supported", at)

        emit(VariableNode(parse_path(tag, at)))

    if stack:
        frame = stack[-1]
        raise TemplateSyntaxError(f"Unclosed {{{{#{frame.kind}}}}} block", frame.position)

    if pos < len(source):
        emit(TextNode(source[pos:]))

    return tuple(root), frozenset(partials)
