# src/logging/context.py - v2
"""Contextual logging support: attach request_id, specialty and stage to log records."""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

# Set per website generation request; asyncio tasks inherit a copy.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_specialty: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "specialty", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    specialty: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        specialty=_specialty.get(),
        stage=_stage.get(),
    )


def set_request_context(request_id: str, specialty: str | None = None) -> None:
    """Set request-level context (called once per generation request)."""
    _request_id.set(request_id)
    _specialty.set(specialty)


def set_specialty(specialty: str) -> None:
    _specialty.set(specialty)


@contextmanager
def stage(name: str) -> Iterator[None]:
    """Tag log records emitted inside the block with a pipeline stage."""
    token = _stage.set(name)
    try:
        yield
    finally:
        _stage.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _specialty.set(None)
    _stage.set(None)
