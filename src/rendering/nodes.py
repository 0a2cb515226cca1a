# src/rendering/nodes.py - v1
"""Template AST.

A compiled template is a tuple of these nodes. Nodes are immutable and hold
no reference to render data, so one tree can serve any number of renders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class VariableNode:
    """``{{path}}`` (escaped) or ``{{{path}}}`` (raw)."""

    path: tuple[str, ...]
    raw: bool = False


@dataclass(frozen=True)
class ConditionalNode:
    """``{{#if path}}...{{/if}}``. There is no else branch."""

    path: tuple[str, ...]
    body: tuple[Node, ...] = ()


@dataclass(frozen=True)
class LoopNode:
    """``{{#each path}}...{{/each}}``."""

    path: tuple[str, ...]
    body: tuple[Node, ...] = ()


@dataclass(frozen=True)
class PartialNode:
    """``{{> name}}``."""

    name: str


Node = Union[TextNode, VariableNode, ConditionalNode, LoopNode, PartialNode]


@dataclass(frozen=True)
class CompiledTemplate:
    """Parsed template plus the identity of the source it came from."""

    nodes: tuple[Node, ...]
    source_hash: str
    partials: frozenset[str] = field(default_factory=frozenset)
